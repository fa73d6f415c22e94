"""Import note-taking markdown exports as static site posts."""

__version__ = "0.1.0"
