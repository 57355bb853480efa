"""Click command line and interactive session."""
