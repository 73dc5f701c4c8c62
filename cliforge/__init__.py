"""Template rendering, post-render steps and tools for driving local AI agent CLIs."""

__version__ = "0.1.0"