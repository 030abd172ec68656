"""Restaurant search, recommendation and booking tools for LLM agents."""

__version__ = "1.0.0"
