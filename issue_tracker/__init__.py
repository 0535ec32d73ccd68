"""Issue tracker backend: projects, issues and the filtered issue list."""

__version__ = "1.0.0"
