"""castfeed - podcast feed generation and caching for static sites."""

__version__ = "1.0.0"
