"""Circus board game agent: rules engine, evaluation and search.

Modules:
- board: positions, piece identity, grid and position index
- rules: move legality, move application and move generation
- game: game state, starting layout and the token-level Game wrapper
- evaluator: heuristic evaluation from one player's point of view
- ai: windowed minimax search and opening heuristics
- protocol: line protocol and turn loop
"""

import logging

from .ai import AIPlayer, SearchResult
from .board import NONE_MOVE, Board, Move, Piece, PieceKind, Position
from .config import EngineConfig
from .evaluator import Evaluator
from .game import Game, GameState, new_game
from .rules import MoveKind, apply_move, classify, legal_moves

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AIPlayer",
    "Board",
    "EngineConfig",
    "Evaluator",
    "Game",
    "GameState",
    "Move",
    "MoveKind",
    "NONE_MOVE",
    "Piece",
    "PieceKind",
    "Position",
    "SearchResult",
    "apply_move",
    "classify",
    "legal_moves",
    "new_game",
]
