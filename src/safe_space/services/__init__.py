"""Business logic services for the Safe Space application."""

from .toggle import ToggleEngine, ToggleResult

__all__ = [
    "ToggleEngine",
    "ToggleResult",
]
