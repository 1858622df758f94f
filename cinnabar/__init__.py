"""Pipeline models, trigger matching, SQLite pipeline storage and webhook decoding for a CI service."""

__version__ = "0.1.0"

__all__ = [
    "image_reference",
    "trigger",
    "pipeline",
    "repository",
    "webhook",
]