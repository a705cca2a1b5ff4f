"""RenoBoard Core: accounts and session tokens for the RenoBoard backend."""

__version__ = "0.1.0"
