"""Filter line classification, URL hostname extraction, request tokenization and redirect resources for content blocking."""

__version__ = "0.1.0"

__all__ = [
    "lists",
    "regex_url_parser",
    "request",
    "resources",
    "url_parser",
    "utils",
]