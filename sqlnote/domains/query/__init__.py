"""Query editing support: completion and statement execution."""
