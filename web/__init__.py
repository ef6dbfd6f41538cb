"""JSON HTTP surface for the circus agent."""

from .app import create_app

__all__ = ["create_app"]
