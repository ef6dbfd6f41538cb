"""Move legality, move application and move generation.

``classify`` decides what kind of move a (from, to) pair is on a given board,
``apply_move`` performs a classified move in place and ``legal_moves``
generates every legal move for one side.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Set, Tuple

from .board import (
    NEIGHBOUR_OFFSETS,
    NONE_MOVE,
    Board,
    Move,
    Piece,
    PieceKind,
    Position,
    chebyshev,
    encode,
    manhattan,
)
from .errors import RulesInvariantError


class MoveKind(Enum):
    ILLEGAL = "illegal"
    NO_MOVE = "no_move"
    SIMPLE = "simple"
    LONG = "long"
    SWAP = "swap"
    PUSH = "push"


LONG_OFFSETS = [
    (-2, -2), (-2, 0), (-2, 2),
    (0, -2),           (0, 2),
    (2, -2),  (2, 0),  (2, 2),
]

# Pieces of the opponent a magician may not trade places with
_SWAP_PROTECTED = frozenset({PieceKind.TRAINER, PieceKind.MAGICIAN})


def is_blocked(trainer_active: bool, trainer_pos: Optional[Position], target: Position, is_goal: bool) -> bool:
    """Whether ``target`` lies in the zone of control of a trainer.

    Goals are never blocked.
    """
    if not trainer_active or is_goal or trainer_pos is None:
        return False
    return chebyshev(trainer_pos, target) <= 1


def opposing_trainer(board: Board, owner: int) -> Tuple[bool, Optional[Position]]:
    """(active, position) of the trainer playing against ``owner``."""
    trainer = Piece(1 - owner, PieceKind.TRAINER, 0)
    pos = board.positions.get(trainer)
    return (pos is not None and trainer in board.in_play), pos


def push_target(src: Position, dst: Position) -> Position:
    return Position(2 * dst.row - src.row, 2 * dst.col - src.col)


def moves_own_piece(board: Board, move: Move, player: int) -> bool:
    """Whether ``move`` is the pass move or starts from a piece ``player`` owns."""
    if move == NONE_MOVE:
        return True
    if not board.in_bounds(move.src):
        return False
    mover = board.piece_at(move.src)
    return mover is not None and mover.owner == player


def classify(board: Board, move: Move) -> MoveKind:
    if move == NONE_MOVE:
        return MoveKind.NO_MOVE

    src, dst = move
    if src == dst:
        return MoveKind.ILLEGAL
    if not board.in_bounds(src) or not board.in_bounds(dst):
        return MoveKind.ILLEGAL
    # Pieces standing on a goal have arrived and stay put
    if board.is_house(src):
        return MoveKind.ILLEGAL

    target = board.piece_at(dst)
    dst_house = board.is_house(dst)
    if dst_house and target is not None:
        return MoveKind.ILLEGAL

    mover = board.piece_at(src)
    if mover is None:
        return MoveKind.ILLEGAL

    trainer_active, trainer_pos = opposing_trainer(board, mover.owner)
    if is_blocked(trainer_active, trainer_pos, src, False) or is_blocked(
        trainer_active, trainer_pos, dst, dst_house
    ):
        return MoveKind.ILLEGAL

    if target is None:
        step = manhattan(src, dst) if dst_house else chebyshev(src, dst)
        if step == 1:
            return MoveKind.SIMPLE

    kind = mover.kind
    if kind is PieceKind.ACROBAT:
        if target is None:
            drow, dcol = abs(dst.row - src.row), abs(dst.col - src.col)
            straight = (drow, dcol) in ((0, 2), (2, 0))
            diagonal = drow == 2 and dcol == 2 and not dst_house
            if straight or diagonal:
                return MoveKind.LONG
    elif kind is PieceKind.STRONGMAN:
        if target is not None and chebyshev(src, dst) == 1:
            pushed_to = push_target(src, dst)
            if board.in_bounds(pushed_to) and board.piece_at(pushed_to) is None:
                pushed_house = board.is_house(pushed_to)
                axis_aligned = src.row == dst.row or src.col == dst.col
                if (not pushed_house or axis_aligned) and not is_blocked(
                    trainer_active, trainer_pos, pushed_to, pushed_house
                ):
                    return MoveKind.PUSH
    elif kind is PieceKind.MAGICIAN:
        if target is not None and (target.owner == mover.owner or target.kind not in _SWAP_PROTECTED):
            return MoveKind.SWAP

    return MoveKind.ILLEGAL


def _arrive(board: Board, p: Piece, position: Position) -> None:
    if board.is_house(position):
        board.in_play.discard(p)
        board.free_houses.discard(position)


def apply_move(board: Board, move: Move) -> MoveKind:
    """Apply ``move`` to ``board`` in place and return its kind.

    Raises RulesInvariantError for an illegal move.
    """
    kind = classify(board, move)

    if kind is MoveKind.ILLEGAL:
        raise RulesInvariantError("illegal move reached the mutator", context={"move": move})
    if kind is MoveKind.NO_MOVE:
        return kind

    src, dst = move
    mover = board.piece_at(src)

    if kind in (MoveKind.SIMPLE, MoveKind.LONG):
        board.clear(src)
        board.place(dst, mover)
        _arrive(board, mover, dst)
    elif kind is MoveKind.SWAP:
        other = board.piece_at(dst)
        board.place(dst, mover)
        board.place(src, other)
    elif kind is MoveKind.PUSH:
        pushed = board.piece_at(dst)
        pushed_to = push_target(src, dst)
        board.clear(src)
        board.place(pushed_to, pushed)
        board.place(dst, mover)
        _arrive(board, pushed, pushed_to)
    return kind


def legal_moves(board: Board, player: int, include_swaps: bool = True) -> List[Move]:
    """All legal moves for ``player``; the pass move is always last."""
    moves: List[Move] = []
    seen: Set[Move] = set()

    def probe(src: Position, dst: Position) -> None:
        move = Move(src, dst)
        if move in seen:
            return
        seen.add(move)
        if classify(board, move) is not MoveKind.ILLEGAL:
            moves.append(move)

    active = sorted(board.in_play, key=encode)
    for p in active:
        if p.owner != player:
            continue
        pos = board.positions.get(p)
        if pos is None:
            continue
        for drow, dcol in NEIGHBOUR_OFFSETS:
            probe(pos, pos.shifted(drow, dcol))

    acrobat = Piece(player, PieceKind.ACROBAT, 0)
    acrobat_pos = board.positions.get(acrobat)
    if acrobat in board.in_play and acrobat_pos is not None:
        for drow, dcol in LONG_OFFSETS:
            probe(acrobat_pos, acrobat_pos.shifted(drow, dcol))

    if include_swaps:
        magician = Piece(player, PieceKind.MAGICIAN, 0)
        magician_pos = board.positions.get(magician)
        if magician in board.in_play and magician_pos is not None:
            for other in active:
                other_pos = board.positions.get(other)
                if other == magician or other_pos is None:
                    continue
                probe(magician_pos, other_pos)

    moves.append(NONE_MOVE)
    return moves
