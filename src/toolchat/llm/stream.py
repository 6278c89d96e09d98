"""Decoder for streamed chat-completion bodies.

The completion API streams line-delimited event records::

    data: {"choices":[{"delta":{"content":"Hi"}}]}

    data: [DONE]

StreamDecoder turns raw byte chunks into text fragments. It is tolerant:
a malformed event is skipped and counted, never raised. Lines without the
``data: `` prefix (blank separators, comments) are ignored.
"""

from __future__ import annotations

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class StreamDecoder:
    """Incremental decoder for ``data: `` framed completion streams.

    Feed it byte chunks in arrival order; each call returns the fragments
    extracted from the complete lines seen so far. A trailing partial line
    is held until the next chunk or :meth:`finish`.

    Once the ``[DONE]`` sentinel is seen, :attr:`done` is True and every
    later line, in the same chunk or any later one, is dropped.

    Attributes:
        skipped: Number of ``data:`` lines whose payload could not be
            decoded into a fragment.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self._parts: list[str] = []
        self.done = False
        self.skipped = 0

    @property
    def text(self) -> str:
        """All fragments accumulated so far."""
        return "".join(self._parts)

    def feed(self, chunk: bytes) -> list[str]:
        """Decode one chunk and return the fragments it completes."""
        if self.done:
            return []
        self._pending += self._decoder.decode(chunk)
        *lines, self._pending = self._pending.split("\n")
        return self._consume(lines)

    def finish(self) -> list[str]:
        """Flush the held partial line at end of channel."""
        if self.done:
            return []
        self._pending += self._decoder.decode(b"", final=True)
        tail, self._pending = self._pending, ""
        return self._consume([tail])

    def _consume(self, lines: list[str]) -> list[str]:
        fragments: list[str] = []
        for line in lines:
            line = line.strip()
            if not line.startswith(DATA_PREFIX):
                continue
            payload = line[len(DATA_PREFIX):]
            if payload == DONE_SENTINEL:
                self.done = True
                self._pending = ""
                break
            fragment = self._extract(payload)
            if fragment:
                fragments.append(fragment)
        self._parts.extend(fragments)
        return fragments

    def _extract(self, payload: str) -> str | None:
        try:
            content = json.loads(payload)["choices"][0]["delta"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            self.skipped += 1
            logger.debug("Skipping undecodable stream event: %r", payload)
            return None
        if content is None:
            return None
        if not isinstance(content, str):
            self.skipped += 1
            logger.debug("Skipping non-text stream delta: %r", payload)
            return None
        return content


async def decode_stream(
    chunks: AsyncIterable[bytes],
    decoder: StreamDecoder | None = None,
) -> AsyncIterator[str]:
    """Yield text fragments from a stream of raw body chunks.

    The sequence is lazy, finite and not restartable. No fragment is
    yielded after the ``[DONE]`` sentinel, but ``chunks`` is still drained
    to end of channel so the transport closes cleanly. Transport errors
    raised by ``chunks`` propagate to the consumer.

    Args:
        chunks: Raw body chunks, e.g. from ``OpenAIClient.stream()``.
        decoder: Optional decoder to use, so the caller can inspect
            ``text`` and ``skipped`` afterwards.
    """
    decoder = decoder if decoder is not None else StreamDecoder()
    async for chunk in chunks:
        for fragment in decoder.feed(chunk):
            yield fragment
    for fragment in decoder.finish():
        yield fragment
    if decoder.skipped:
        logger.debug("Stream finished with %d skipped events", decoder.skipped)
