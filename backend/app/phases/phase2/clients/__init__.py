"""Search API clients: Serper."""

from .serper import search_serper

__all__ = ["search_serper"]
