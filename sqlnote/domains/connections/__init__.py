"""Database connections: configuration, adapters and sessions."""
