"""rest api frontend."""
