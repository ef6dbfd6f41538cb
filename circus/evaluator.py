from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from .board import CODE_SPACE, PieceKind, decode
from .rules import is_blocked, opposing_trainer

if TYPE_CHECKING:
    from .game import GameState


class Evaluator:
    """Static evaluation for circus positions.

    Scores are always from ``state.my_player``'s point of view: positive is
    good for the searching side, whoever is to move. The weights are
    deliberately asymmetric. Our own pieces that have not arrived cost us,
    the opponent's pieces that have not arrived earn us a smaller amount, so
    the search keeps pushing pieces toward the goals.
    """

    ARRIVED_BONUS = 1000
    ARRIVED_PENALTY = 600

    MY_BASE_WEIGHTS: Dict[PieceKind, int] = {
        PieceKind.CLOWN: -100,
        PieceKind.STRONGMAN: -80,
        PieceKind.ACROBAT: -80,
        PieceKind.MAGICIAN: -60,
        PieceKind.TRAINER: 0,
    }

    THEIR_BASE_WEIGHTS: Dict[PieceKind, int] = {
        PieceKind.CLOWN: 60,
        PieceKind.STRONGMAN: 50,
        PieceKind.ACROBAT: 50,
        PieceKind.MAGICIAN: 40,
        PieceKind.TRAINER: 0,
    }

    # Applied when a piece sits in the zone of control of the trainer opposing it
    BLOCKED_WEIGHTS: Dict[PieceKind, int] = {
        PieceKind.CLOWN: 30,
        PieceKind.STRONGMAN: 20,
        PieceKind.ACROBAT: 20,
        PieceKind.MAGICIAN: 40,
        PieceKind.TRAINER: 10,
    }

    PROGRESS_WEIGHT = 3

    # Trainers never score, so they are not drawn toward goals
    GOAL_DISTANCE_WEIGHTS: Dict[PieceKind, int] = {
        PieceKind.CLOWN: 8,
        PieceKind.STRONGMAN: 6,
        PieceKind.ACROBAT: 6,
        PieceKind.MAGICIAN: 6,
        PieceKind.TRAINER: 0,
    }

    @classmethod
    def evaluate(cls, state: "GameState") -> int:
        board = state.board
        me = state.my_player
        trainers = {owner: opposing_trainer(board, owner) for owner in (0, 1)}

        score = 0
        for code in range(CODE_SPACE):
            p = decode(code)
            if p is None:
                continue
            pos = board.positions.get(p)
            if pos is None:
                continue

            mine = p.owner == me
            if board.is_house(pos):
                score += cls.ARRIVED_BONUS if mine else -cls.ARRIVED_PENALTY
                continue

            sign = 1 if mine else -1
            score += cls.MY_BASE_WEIGHTS[p.kind] if mine else cls.THEIR_BASE_WEIGHTS[p.kind]

            trainer_active, trainer_pos = trainers[p.owner]
            if is_blocked(trainer_active, trainer_pos, pos, False):
                score -= sign * cls.BLOCKED_WEIGHTS[p.kind]

            score += sign * cls.PROGRESS_WEIGHT * pos.col

            distance = board.nearest_free_house_distance(pos)
            if distance is not None:
                score -= sign * cls.GOAL_DISTANCE_WEIGHTS[p.kind] * distance

        return score
