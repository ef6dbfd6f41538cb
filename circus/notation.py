"""Text encoding of positions and moves.

A position is two characters: the row as a letter (``'A' + row``) followed by
the column as a character counted from ``'1'``. A move is ``<pos>-<pos>``.
The pass move encodes as ``Z0-Z0``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .board import Move, Position
from .errors import ProtocolError

logger = logging.getLogger(__name__)

MOVE_TOKEN_LENGTH = 5


def format_position(pos: Position) -> str:
    return chr(ord("A") + pos.row) + chr(ord("1") + pos.col)


def parse_position(token: str) -> Position:
    if len(token) != 2:
        raise ProtocolError("position token must be two characters", context={"token": token})
    return Position(ord(token[0]) - ord("A"), ord(token[1]) - ord("1"))


def format_move(move: Move) -> str:
    return f"{format_position(move.src)}-{format_position(move.dst)}"


def parse_move(token: str, log: Optional[logging.Logger] = None) -> Move:
    log = log or logger
    if len(token) != MOVE_TOKEN_LENGTH:
        log.warning("unexpected move token length: %r", token)
        raise ProtocolError("move token must be five characters", context={"token": token})
    if token[2] != "-":
        log.warning("unexpected symbol when reading move: %r", token)
    return Move(parse_position(token[0:2]), parse_position(token[3:5]))
