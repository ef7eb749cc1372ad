"""MCP server exposing real-time weather from the QWeather API."""

__version__ = "1.0.0"
