"""Binary records, linked-list collections and length-prefixed TCP messaging."""

__version__ = "0.1.0"