"""Full-screen terminal interface."""

from .app import run

__all__ = ["run"]
