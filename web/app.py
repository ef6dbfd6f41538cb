from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from circus import AIPlayer, EngineConfig, Game
from circus.errors import CircusError, ConfigurationError, InvalidMoveError, ProtocolError
from circus.notation import format_move

logger = logging.getLogger(__name__)


def create_app(config: Optional[EngineConfig] = None) -> Flask:
    app = Flask(__name__)

    config = config or EngineConfig.from_env()
    game = Game(config)
    ai = AIPlayer(config)

    def ai_reply() -> Optional[str]:
        # Caller holds game.lock
        if game.is_game_over() or not game.state.is_my_turn:
            return None
        move = ai.choose_move(game.state)
        game.push(move)
        return format_move(move)

    # Input errors only; a RulesInvariantError is an engine fault and stays a 500
    @app.errorhandler(InvalidMoveError)
    @app.errorhandler(ProtocolError)
    @app.errorhandler(ConfigurationError)
    def handle_circus_error(exc: CircusError):
        logger.warning("rejected request: %s", exc)
        return jsonify({"error": exc.message, "context": {k: str(v) for k, v in exc.context.items()}}), 400

    @app.get("/api/state")
    def api_state():
        with game.lock:
            return jsonify(game.snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        houses = data.get("houses")
        if not isinstance(houses, list):
            return jsonify({"error": "Missing houses"}), 400
        try:
            player = int(data.get("player", 0))
        except (TypeError, ValueError):
            return jsonify({"error": "player must be 0 or 1"}), 400

        with game.lock:
            game.reset([str(h) for h in houses], player)
            # The agent opens when it plays first
            ai_move = ai_reply()
            snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        token = payload.get("move")
        if not token:
            return jsonify({"error": "Missing move"}), 400

        with game.lock:
            game.push_token(str(token))
            ai_move = ai_reply()
            snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
