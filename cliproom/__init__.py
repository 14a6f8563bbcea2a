"""ClipRoom - shared clipboard rooms with encrypted storage."""

__version__ = "0.1.0"
