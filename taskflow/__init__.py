"""TaskFlow — team task management API backed by an in-memory entity store."""

__version__ = "0.1.0"
