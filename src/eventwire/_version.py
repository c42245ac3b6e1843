"""Package version; keep in sync with pyproject.toml."""

__version__ = "0.1.0"
