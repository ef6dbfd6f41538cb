from __future__ import annotations

from circus.board import Piece, PieceKind, Position
from circus.evaluator import Evaluator
from circus.game import GameState

MY_CLOWN = Piece(0, PieceKind.CLOWN)
THEIR_CLOWN = Piece(1, PieceKind.CLOWN)
THEIR_TRAINER = Piece(1, PieceKind.TRAINER)


def small_position(make_board):
    return make_board(
        {
            MY_CLOWN: Position(0, 3),
            THEIR_CLOWN: Position(4, 4),
            THEIR_TRAINER: Position(1, 3),
        },
        houses=[Position(0, 5)],
    )


def test_exact_score_from_player_zero(make_board):
    state = GameState(small_position(make_board), my_player=0)
    # my clown:    -100 base, -30 in the trainer's zone, +9 progress, -16 distance
    # their clown:  +60 base, -12 progress, +40 distance
    # their trainer: -9 progress
    assert Evaluator.evaluate(state) == -137 + 88 - 9


def test_exact_score_from_player_one(make_board):
    state = GameState(small_position(make_board), my_player=1)
    # their clown (player 0): +60 base, +30 in my trainer's zone, -9 progress, +16 distance
    # my clown:    -100 base, +12 progress, -40 distance
    # my trainer:  +9 progress
    assert Evaluator.evaluate(state) == 97 - 128 + 9


def test_perspective_is_not_a_sign_flip(make_board):
    board = small_position(make_board)
    mine = Evaluator.evaluate(GameState(board, my_player=0))
    theirs = Evaluator.evaluate(GameState(board, my_player=1))
    assert mine != -theirs


def test_score_ignores_side_to_move(make_board):
    board = small_position(make_board)
    assert Evaluator.evaluate(GameState(board, 0, current_player=0)) == Evaluator.evaluate(
        GameState(board, 0, current_player=1)
    )


def test_arrived_pieces_score_flat(make_board):
    house = Position(2, 2)
    board = make_board({MY_CLOWN: house}, houses=[house, Position(8, 8)])
    board.in_play.discard(MY_CLOWN)
    assert Evaluator.evaluate(GameState(board, 0)) == Evaluator.ARRIVED_BONUS
    assert Evaluator.evaluate(GameState(board, 1)) == -Evaluator.ARRIVED_PENALTY


def test_no_free_goal_drops_the_distance_term(make_board):
    board = make_board({MY_CLOWN: Position(0, 3)})
    assert Evaluator.evaluate(GameState(board, 0)) == -100 + 9


def test_progress_and_proximity_are_rewarded(make_board):
    near = make_board({MY_CLOWN: Position(4, 6)}, houses=[Position(4, 8)])
    far = make_board({MY_CLOWN: Position(4, 2)}, houses=[Position(4, 8)])
    assert Evaluator.evaluate(GameState(near, 0)) > Evaluator.evaluate(GameState(far, 0))


def test_start_position_is_symmetric_for_mirrored_sides(start_state):
    # The house set is symmetric about the middle row, so both sides see the same score
    mirrored = start_state.clone()
    mirrored.my_player = 1
    assert Evaluator.evaluate(start_state) == Evaluator.evaluate(mirrored)
