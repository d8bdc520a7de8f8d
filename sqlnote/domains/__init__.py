"""Feature domains for sqlnote."""
