"""SwiftTS -- scaffold and drive small TypeScript HTTP services."""

__version__ = "1.0.0"
