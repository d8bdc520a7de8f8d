"""Connection session lifecycle and serialized execution."""
