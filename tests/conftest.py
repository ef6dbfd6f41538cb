from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

import pytest

from circus import Board, EngineConfig, Piece, Position, new_game
from circus.notation import parse_position

# Thirteen goals on the right half of the board: a column of nine plus four inside it
HOUSE_TOKENS = ["A9", "B9", "C9", "D9", "E9", "F9", "G9", "H9", "I9", "C8", "G8", "E7", "E6"]


@pytest.fixture
def house_tokens():
    return list(HOUSE_TOKENS)


@pytest.fixture
def houses():
    return [parse_position(token) for token in HOUSE_TOKENS]


@pytest.fixture
def start_state(houses):
    return new_game(houses, my_player=0)


@pytest.fixture
def fast_config() -> EngineConfig:
    # Depth 0 for any real position keeps tests quick
    return EngineConfig(search_budget=1, max_depth=1)


BoardFactory = Callable[..., Board]


@pytest.fixture
def make_board() -> BoardFactory:
    def build(
        pieces: Optional[Dict[Piece, Position]] = None,
        houses: Iterable[Position] = (),
        rows: int = 9,
        cols: int = 12,
    ) -> Board:
        board = Board(rows, cols)
        for house in houses:
            board.add_house(house)
        for p, pos in (pieces or {}).items():
            board.place(pos, p)
            board.in_play.add(p)
        return board

    return build
