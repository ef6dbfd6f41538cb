"""Exception hierarchy for the circus agent.

All custom exceptions inherit from CircusError so callers at the process
boundary (CLI, HTTP) can catch them in one place.

Usage:
    from circus.errors import InvalidMoveError

    try:
        game.push_token("A1-B2")
    except InvalidMoveError as e:
        logger.warning("rejected move: %s", e.message)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "CircusError",
    "ConfigurationError",
    "InvalidMoveError",
    "ProtocolError",
    "RulesInvariantError",
]


class CircusError(Exception):
    """Base exception for all circus agent errors.

    Attributes:
        message: Human-readable error description
        context: Additional context for debugging
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({details})"


class RulesInvariantError(CircusError, AssertionError):
    """An illegal move reached the state mutator.

    This is a programming fault in move generation or search, never an input
    error, and is not meant to be recovered from.
    """


class InvalidMoveError(CircusError, ValueError):
    """A move submitted at an API boundary is not legal in the current state."""


class ProtocolError(CircusError, ValueError):
    """Malformed or illegal input on the line protocol."""


class ConfigurationError(CircusError, ValueError):
    """Invalid engine configuration."""
