"""wbs editor: undoable, command-driven restructuring of work-breakdown trees."""

__version__ = "0.1.0"
