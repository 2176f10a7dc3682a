"""TCP echo server, connect/accept probes, line chat and ordered asyncio sessions."""

__version__ = "0.1.0"