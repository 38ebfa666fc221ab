"""A small Linux server panel: system statistics, directory listing, image storage and task queue types."""

__version__ = "0.1.0"