"""terminal frontend."""
