"""Board model: positions, piece identity and the occupancy structures.

This module knows nothing about the rules. It keeps the grid of cells and the
piece -> position index in step for callers that already decided a change is
legal.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Set

from .config import DEFAULT_CONFIG


class Position(NamedTuple):
    row: int
    col: int

    def shifted(self, drow: int, dcol: int) -> "Position":
        return Position(self.row + drow, self.col + dcol)


class Move(NamedTuple):
    src: Position
    dst: Position


NONE_POSITION = Position(25, -1)
NONE_MOVE = Move(NONE_POSITION, NONE_POSITION)

NEIGHBOUR_OFFSETS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]


def chebyshev(a: Position, b: Position) -> int:
    return max(abs(a.row - b.row), abs(a.col - b.col))


def manhattan(a: Position, b: Position) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


class PieceKind(IntEnum):
    """Piece roles. Values are the offsets used by the dense piece code."""

    CLOWN = 0
    STRONGMAN = 2
    ACROBAT = 4
    MAGICIAN = 5
    TRAINER = 6


# Kinds a side owns two of; the second one carries variant 1
PAIRED_KINDS = frozenset({PieceKind.CLOWN, PieceKind.STRONGMAN})

CODES_PER_OWNER = 8
_KIND_VALUES = frozenset(k.value for k in PieceKind)
CODE_SPACE = 2 * CODES_PER_OWNER


class Piece(NamedTuple):
    owner: int
    kind: PieceKind
    variant: int = 0


def piece(owner: int, kind: PieceKind, variant: int = 0) -> Piece:
    """Build a validated piece identity."""
    if owner not in (0, 1):
        raise ValueError(f"owner must be 0 or 1, got {owner!r}")
    kind = PieceKind(kind)
    if variant not in (0, 1) or (variant == 1 and kind not in PAIRED_KINDS):
        raise ValueError(f"invalid variant {variant!r} for {kind.name}")
    return Piece(owner, kind, variant)


def encode(p: Piece) -> int:
    return p.owner * CODES_PER_OWNER + int(p.kind) + p.variant


def decode(code: int) -> Optional[Piece]:
    """Invert encode(); returns None for codes that name no piece."""
    if not 0 <= code < CODE_SPACE:
        return None
    owner, rest = divmod(code, CODES_PER_OWNER)
    if rest in _KIND_VALUES:
        return Piece(owner, PieceKind(rest), 0)
    # One above a paired kind is its second copy
    base = rest - 1
    if base in _KIND_VALUES and PieceKind(base) in PAIRED_KINDS:
        return Piece(owner, PieceKind(base), 1)
    return None


def owner_of(code: int) -> Optional[int]:
    p = decode(code)
    return None if p is None else p.owner


def kind_of(code: int) -> Optional[PieceKind]:
    p = decode(code)
    return None if p is None else p.kind


def all_pieces() -> Iterator[Piece]:
    """Every valid piece, in code order."""
    for code in range(CODE_SPACE):
        p = decode(code)
        if p is not None:
            yield p


class Cell:
    __slots__ = ("has_house", "piece")

    def __init__(self, has_house: bool = False, piece: Optional[Piece] = None) -> None:
        self.has_house = has_house
        self.piece = piece

    def __repr__(self) -> str:
        return f"Cell(has_house={self.has_house}, piece={self.piece})"


class Board:
    """Grid of cells plus the inverse index from piece to position.

    ``free_houses`` holds the goals nobody has arrived at yet and ``in_play``
    the pieces that have not arrived yet.
    """

    def __init__(self, rows: int = DEFAULT_CONFIG.rows, cols: int = DEFAULT_CONFIG.cols) -> None:
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = [[Cell() for _ in range(cols)] for _ in range(rows)]
        self.positions: Dict[Piece, Position] = {}
        self.houses: Set[Position] = set()
        self.free_houses: Set[Position] = set()
        self.in_play: Set[Piece] = set()

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.col < self.cols

    def cell(self, position: Position) -> Cell:
        return self.cells[position.row][position.col]

    def piece_at(self, position: Position) -> Optional[Piece]:
        return self.cells[position.row][position.col].piece

    def is_house(self, position: Position) -> bool:
        return self.cells[position.row][position.col].has_house

    def position_of(self, p: Piece) -> Optional[Position]:
        return self.positions.get(p)

    def add_house(self, position: Position) -> None:
        self.cell(position).has_house = True
        self.houses.add(position)
        self.free_houses.add(position)

    def place(self, position: Position, p: Piece) -> None:
        """Put ``p`` on ``position``. The piece's previous cell is left alone."""
        self.cells[position.row][position.col].piece = p
        self.positions[p] = position

    def clear(self, position: Position) -> None:
        self.cells[position.row][position.col].piece = None

    def pieces(self) -> Iterable[Piece]:
        return self.positions.keys()

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.rows = self.rows
        clone.cols = self.cols
        clone.cells = [[Cell(c.has_house, c.piece) for c in row] for row in self.cells]
        clone.positions = dict(self.positions)
        clone.houses = set(self.houses)
        clone.free_houses = set(self.free_houses)
        clone.in_play = set(self.in_play)
        return clone

    def is_consistent(self) -> bool:
        """True when the grid and the position index describe the same layout."""
        for p, pos in self.positions.items():
            if not self.in_bounds(pos) or self.piece_at(pos) != p:
                return False
        occupied = 0
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell.piece is None:
                    continue
                occupied += 1
                if self.positions.get(cell.piece) != Position(r, c):
                    return False
        return occupied == len(self.positions)

    def nearest_free_house_distance(self, position: Position) -> Optional[int]:
        """Manhattan distance to the closest unclaimed goal, None when all are taken."""
        if not self.free_houses:
            return None
        return min(manhattan(position, house) for house in self.free_houses)
