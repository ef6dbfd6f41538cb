from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Move, Piece, PieceKind, Position
from .config import DEFAULT_CONFIG, EngineConfig
from .evaluator import Evaluator
from .game import GameState
from .notation import format_move
from .rules import MoveKind, classify


@dataclass
class SearchResult:
    best_move: Move
    score: int
    nodes: int
    scored_moves: List[Tuple[Move, int]] = field(default_factory=list)


class AIPlayer:
    """Depth-limited minimax with a score window between plies.

    Every level scores all children with the static evaluator first and only
    recurses into the ones within ``prune_margin`` of the best shallow score
    for the side to move. The opponent is modelled as minimising our score.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        evaluator: type = Evaluator,
        logger: Optional[logging.Logger] = None,
        opening_heuristics: bool = True,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.evaluator = evaluator
        self.log = logger if logger is not None else logging.getLogger(__name__)
        self.opening_heuristics = opening_heuristics

    def choose_move(self, state: GameState) -> Move:
        start = time.perf_counter()

        if self.opening_heuristics and state.is_my_turn:
            shortcut = self.opening_move(state)
            if shortcut is not None:
                self.log.info("opening heuristic picked %s", format_move(shortcut))
                return shortcut

        branching = len(state.legal_moves())
        depth = self.choose_depth(branching)
        result = self.search(state, depth)
        self.log.info(
            "search picked %s score=%d depth=%d branching=%d nodes=%d in %.0fms",
            format_move(result.best_move),
            result.score,
            depth,
            branching,
            result.nodes,
            (time.perf_counter() - start) * 1000,
        )
        return result.best_move

    def choose_depth(self, branching: int) -> int:
        """Pick a depth so the tree stays near ``search_budget`` states."""
        max_depth = self.config.max_depth
        if branching <= 1:
            return max_depth
        if self.config.search_budget <= 1:
            return 0
        depth = int(math.floor(math.log(self.config.search_budget) / math.log(branching)))
        return max(0, min(max_depth, depth))

    def search(self, state: GameState, depth: int) -> SearchResult:
        maximizing = state.is_my_turn
        moves = state.legal_moves()

        children: List[GameState] = []
        scored: List[Tuple[Move, int]] = []
        for move in moves:
            child = state.clone()
            child.apply(move)
            children.append(child)
            scored.append((move, self.evaluator.evaluate(child)))
        nodes = len(children)

        if depth > 0:
            order = sorted(range(len(moves)), key=lambda i: scored[i][1], reverse=maximizing)
            best_shallow = scored[order[0]][1]
            margin = self.config.prune_margin
            if maximizing:
                survivors = [i for i in order if scored[i][1] >= best_shallow - margin]
            else:
                survivors = [i for i in order if scored[i][1] <= best_shallow + margin]

            deep: List[Tuple[Move, int]] = []
            for i in survivors:
                sub = self.search(children[i], depth - 1)
                nodes += sub.nodes
                deep.append((moves[i], sub.score))
            scored = deep

        scored.sort(key=lambda item: item[1], reverse=maximizing)
        best_move, best_score = scored[0]
        return SearchResult(best_move=best_move, score=best_score, nodes=nodes, scored_moves=scored)

    def opening_move(self, state: GameState) -> Optional[Move]:
        """Hand-written swaps that bring a scoring piece next to a free goal.

        An acrobat near a goal trades places with a magician that is not;
        a magician near a goal trades places with a clown that is further out.
        """
        board = state.board
        me = state.my_player
        near = self.config.near_goal_distance

        def active_position(p: Piece) -> Optional[Position]:
            if p not in board.in_play:
                return None
            return board.positions.get(p)

        magician_pos = active_position(Piece(me, PieceKind.MAGICIAN, 0))
        if magician_pos is None or not board.free_houses:
            return None
        magician_dist = board.nearest_free_house_distance(magician_pos)

        acrobat_pos = active_position(Piece(me, PieceKind.ACROBAT, 0))
        if acrobat_pos is not None and magician_dist > near:
            if board.nearest_free_house_distance(acrobat_pos) <= near:
                move = Move(magician_pos, acrobat_pos)
                if classify(board, move) is not MoveKind.ILLEGAL:
                    return move

        if magician_dist <= near:
            for variant in (0, 1):
                clown_pos = active_position(Piece(me, PieceKind.CLOWN, variant))
                if clown_pos is None or board.nearest_free_house_distance(clown_pos) <= magician_dist:
                    continue
                move = Move(magician_pos, clown_pos)
                if classify(board, move) is not MoveKind.ILLEGAL:
                    return move
        return None
