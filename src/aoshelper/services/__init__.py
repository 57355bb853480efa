"""Services built on top of the command index."""
