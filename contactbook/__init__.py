"""Contact book: FastAPI + SQLite person directory."""

__version__ = "0.1.0"
