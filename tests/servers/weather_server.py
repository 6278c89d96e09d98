"""Minimal stdio MCP server used by the MCP executor tests."""

from mcp.server.fastmcp import FastMCP

server = FastMCP("weather")


@server.tool()
def get_weather(city: str) -> str:
    """Current weather for a city."""
    return f"Sunny in {city}, 21C"


@server.tool()
def total(values: list[float]) -> float:
    """Sum a list of numbers."""
    return sum(values)


if __name__ == "__main__":
    server.run()
