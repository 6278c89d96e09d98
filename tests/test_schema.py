"""Tests for tool input schema adaptation."""

from __future__ import annotations

import copy

from toolchat.toolkit.schema import adapt_input_schema


def test_array_of_numbers_becomes_array_of_strings():
    schema = {
        "type": "object",
        "properties": {"values": {"type": "array", "items": {"type": "number"}}},
        "required": ["values"],
    }
    adapted = adapt_input_schema(schema)
    assert adapted["properties"]["values"] == {"type": "array", "items": {"type": "string"}}
    assert adapted["required"] == ["values"]


def test_array_item_detail_is_discarded():
    schema = {
        "properties": {
            "entries": {
                "type": "array",
                "description": "Structured entries",
                "minItems": 1,
                "items": {"type": "object", "properties": {"uid": {"type": "string"}}},
            }
        }
    }
    adapted = adapt_input_schema(schema)
    assert adapted["properties"]["entries"] == {"type": "array", "items": {"type": "string"}}


def test_non_array_properties_pass_through():
    schema = {
        "type": "object",
        "properties": {
            "city": {"type": "string", "description": "City name"},
            "days": {"type": "integer", "minimum": 1},
            "options": {"type": "object", "properties": {"units": {"type": "string"}}},
        },
        "required": ["city"],
    }
    adapted = adapt_input_schema(schema)
    assert adapted["properties"] == schema["properties"]
    assert adapted["required"] == ["city"]
    assert adapted["type"] == "object"


def test_adapter_is_idempotent():
    schema = {
        "type": "object",
        "properties": {
            "tags": {"type": "array", "items": {"type": "integer"}},
            "name": {"type": "string"},
        },
        "required": ["name"],
    }
    once = adapt_input_schema(schema)
    assert adapt_input_schema(once) == once


def test_input_schema_is_not_mutated():
    schema = {
        "type": "object",
        "properties": {"tags": {"type": "array", "items": {"type": "integer"}}},
        "required": [],
    }
    original = copy.deepcopy(schema)
    adapt_input_schema(schema)
    assert schema == original


def test_missing_properties_and_required():
    assert adapt_input_schema({"type": "object"}) == {
        "type": "object",
        "properties": {},
        "required": [],
    }
    assert adapt_input_schema(None) == {"type": "object", "properties": {}, "required": []}
