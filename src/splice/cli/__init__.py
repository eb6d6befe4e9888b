"""splice command line."""
