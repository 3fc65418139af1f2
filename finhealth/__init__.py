"""FinHealth: personal-finance tracking with derived summary and health scoring."""

__version__ = "0.1.0"
