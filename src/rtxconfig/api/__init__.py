"""REST API for parsing configuration dumps."""
