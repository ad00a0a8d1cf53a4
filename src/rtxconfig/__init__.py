"""rtxconfig — context-aware parser for router configuration dumps."""

__version__ = "1.0.0"
