"""Generate typed GraphQL hooks and stable re-export index files."""

__version__ = "0.1.0"
