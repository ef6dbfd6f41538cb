from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .board import Board, Move, Piece, PieceKind, Position, encode, piece
from .config import DEFAULT_CONFIG, EngineConfig
from .errors import InvalidMoveError, ProtocolError
from .evaluator import Evaluator
from .notation import format_move, format_position, parse_move, parse_position
from .rules import MoveKind, apply_move, classify, legal_moves, moves_own_piece


def _row_for_player(index: int, player: int, rows: int) -> int:
    return index if player == 0 else rows - 1 - index


def starting_layout(player: int, rows: int = DEFAULT_CONFIG.rows) -> List[Tuple[Piece, Position]]:
    """Initial placement of one side's seven pieces.

    Player 0 starts on the top rows, player 1 mirrored on the bottom rows,
    both in the leftmost columns.
    """

    def at(index: int, col: int) -> Position:
        return Position(_row_for_player(index, player, rows), col)

    return [
        (piece(player, PieceKind.ACROBAT), at(0, 0)),
        (piece(player, PieceKind.CLOWN), at(1, 0)),
        (piece(player, PieceKind.CLOWN, 1), at(0, 1)),
        (piece(player, PieceKind.MAGICIAN), at(1, 1)),
        (piece(player, PieceKind.STRONGMAN), at(2, 0)),
        (piece(player, PieceKind.STRONGMAN, 1), at(0, 2)),
        (piece(player, PieceKind.TRAINER), at(3, 0)),
    ]


class GameState:
    """Board plus turn bookkeeping.

    ``my_player`` is the side the agent plays and never changes; the
    evaluator scores from its point of view.
    """

    def __init__(self, board: Board, my_player: int, done_steps: int = 0, current_player: int = 0) -> None:
        self.board = board
        self.my_player = my_player
        self.done_steps = done_steps
        self.current_player = current_player

    @property
    def is_my_turn(self) -> bool:
        return self.current_player == self.my_player

    def clone(self) -> "GameState":
        return GameState(self.board.copy(), self.my_player, self.done_steps, self.current_player)

    def legal_moves(self, include_swaps: bool = True) -> List[Move]:
        return legal_moves(self.board, self.current_player, include_swaps)

    def apply(self, move: Move) -> MoveKind:
        kind = apply_move(self.board, move)
        self.done_steps += 1
        self.current_player = 1 - self.current_player
        return kind


def new_game(houses: Iterable[Position], my_player: int, config: EngineConfig = DEFAULT_CONFIG) -> GameState:
    board = Board(config.rows, config.cols)
    for house in houses:
        board.add_house(house)
    for player in (0, 1):
        for p, pos in starting_layout(player, config.rows):
            board.place(pos, p)
            board.in_play.add(p)
    return GameState(board, my_player)


class Game:
    """Owns the single in-memory game behind the HTTP surface.

    Moves come in and go out as text tokens; this class checks legality at
    the boundary and reports status snapshots.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.state: Optional[GameState] = None
        self.last_move: Optional[Move] = None
        self.lock = threading.Lock()

    def reset(self, house_tokens: Sequence[str], my_player: int) -> None:
        if len(house_tokens) != self.config.houses_count:
            raise InvalidMoveError(
                "wrong number of houses",
                context={"expected": self.config.houses_count, "got": len(house_tokens)},
            )
        if my_player not in (0, 1):
            raise InvalidMoveError("player must be 0 or 1", context={"player": my_player})
        try:
            houses = [parse_position(token) for token in house_tokens]
        except ProtocolError as exc:
            raise InvalidMoveError(exc.message, context=exc.context) from exc
        for house in houses:
            if not (0 <= house.row < self.config.rows and 0 <= house.col < self.config.cols):
                raise InvalidMoveError("house outside the board", context={"house": format_position(house)})
        self.state = new_game(houses, my_player, self.config)
        self.last_move = None

    def _require_state(self) -> GameState:
        if self.state is None:
            raise InvalidMoveError("no game in progress")
        return self.state

    def is_game_over(self) -> bool:
        state = self._require_state()
        return state.done_steps >= self.config.max_steps or not state.board.free_houses

    def push(self, move: Move) -> MoveKind:
        state = self._require_state()
        if not moves_own_piece(state.board, move, state.current_player):
            raise InvalidMoveError(
                f"Illegal move: {format_move(move)}",
                context={"reason": "not the mover's piece", "player": state.current_player},
            )
        if classify(state.board, move) is MoveKind.ILLEGAL:
            raise InvalidMoveError(f"Illegal move: {format_move(move)}")
        kind = state.apply(move)
        self.last_move = move
        return kind

    def push_token(self, token: str) -> MoveKind:
        """Apply an opponent move given as ``<pos>-<pos>``."""
        state = self._require_state()
        if state.is_my_turn:
            raise InvalidMoveError("it is not the opponent's turn")
        try:
            move = parse_move(token)
        except ProtocolError as exc:
            raise InvalidMoveError(exc.message, context=exc.context) from exc
        return self.push(move)

    def get_legal_moves(self) -> List[str]:
        return [format_move(m) for m in self._require_state().legal_moves()]

    def snapshot(self) -> Dict[str, object]:
        state = self._require_state()
        board = state.board
        pieces = {
            f"{p.owner}:{p.kind.name.lower()}:{p.variant}": format_position(pos)
            for p, pos in sorted(board.positions.items(), key=lambda item: encode(item[0]))
        }
        return {
            "turn": state.current_player,
            "my_player": state.my_player,
            "done_steps": state.done_steps,
            "pieces": pieces,
            "free_houses": sorted(format_position(h) for h in board.free_houses),
            "legal_moves": self.get_legal_moves(),
            "game_over": self.is_game_over(),
            "score": Evaluator.evaluate(state),
            "last_move": format_move(self.last_move) if self.last_move else None,
        }
