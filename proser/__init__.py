"""proser -- scaffold AI-assistant instruction files into a project tree."""

__version__ = "0.1.0"
