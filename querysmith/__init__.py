"""Random SQL schema and SELECT query generation for fuzzing SQL engines."""

__version__ = "0.1.0"

__all__ = ["ast", "dice", "grammar", "schema"]