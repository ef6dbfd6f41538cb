"""Line protocol and turn loop.

Setup is the list of goal positions followed by the player id this process
plays. After that the two sides alternate: on the opponent's turn one move
token is read, on ours the chosen move is written as a line.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, TextIO

from .ai import AIPlayer
from .config import DEFAULT_CONFIG, EngineConfig
from .errors import ProtocolError
from .game import GameState, new_game
from .notation import format_move, format_position, parse_move, parse_position
from .rules import MoveKind, classify, moves_own_piece


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def read_setup(tokens: Iterator[str], config: EngineConfig = DEFAULT_CONFIG) -> GameState:
    try:
        houses = [parse_position(next(tokens)) for _ in range(config.houses_count)]
        raw_player = next(tokens)
    except StopIteration as exc:
        raise ProtocolError("input ended during setup") from exc

    for house in houses:
        if not (0 <= house.row < config.rows and 0 <= house.col < config.cols):
            raise ProtocolError("house outside the board", context={"house": format_position(house)})

    try:
        player = int(raw_player)
    except ValueError as exc:
        raise ProtocolError("player id must be an integer", context={"token": raw_player}) from exc
    if player not in (0, 1):
        raise ProtocolError("player id must be 0 or 1", context={"player": player})

    return new_game(houses, player, config)


def is_finished(state: GameState, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    return state.done_steps >= config.max_steps or not state.board.free_houses


def run_game(
    stdin: TextIO,
    stdout: TextIO,
    config: Optional[EngineConfig] = None,
    ai: Optional[AIPlayer] = None,
    logger: Optional[logging.Logger] = None,
) -> GameState:
    """Play one game over the given streams and return the final state."""
    config = config or DEFAULT_CONFIG
    log = logger if logger is not None else logging.getLogger(__name__)
    ai = ai or AIPlayer(config, logger=log)

    tokens = iter_tokens(stdin)
    state = read_setup(tokens, config)
    log.info("playing as %d with %d houses", state.my_player, len(state.board.houses))

    while not is_finished(state, config):
        if state.is_my_turn:
            move = ai.choose_move(state)
            state.apply(move)
            stdout.write(format_move(move) + "\n")
            stdout.flush()
            continue

        token = next(tokens, None)
        if token is None:
            log.info("input closed after %d half-moves", state.done_steps)
            break
        move = parse_move(token, log)
        if not moves_own_piece(state.board, move, state.current_player):
            raise ProtocolError(
                "opponent moved a piece it does not own",
                context={"move": token, "step": state.done_steps},
            )
        if classify(state.board, move) is MoveKind.ILLEGAL:
            raise ProtocolError("illegal opponent move", context={"move": token, "step": state.done_steps})
        log.debug("opponent played %s", token)
        state.apply(move)

    log.info(
        "game finished after %d half-moves, %d houses free",
        state.done_steps,
        len(state.board.free_houses),
    )
    return state
