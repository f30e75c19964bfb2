import os
import logging
import threading
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from data_access import HighScoreStore
from domain.constants import DIFFICULTY_CONFIG, VALID_MOVES, direction_for_key
from main import build_commentary_feed
from session import SessionController

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

# One session per process, created on first use.
_session = None
_feed = None
_session_lock = threading.Lock()


def get_session() -> SessionController:
    global _session, _feed
    with _session_lock:
        if _session is None:
            _feed = build_commentary_feed()
            _session = SessionController(store=HighScoreStore(), on_event=_feed.handle_event)
        return _session


def get_feed():
    get_session()
    return _feed


def _state_response(status_code: int = 200):
    return jsonify(get_session().snapshot().to_dict()), status_code


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@app.route("/api/state", methods=["GET"])
def get_state():
    """Current snapshot of the session."""
    try:
        return _state_response()
    except Exception as error:
        logging.error(f"Error building game state: {error}")
        return jsonify({"error": "Failed to load game state"}), 500


@app.route("/api/start", methods=["POST"])
def start_game():
    try:
        get_session().start()
        return _state_response()
    except Exception as error:
        logging.error(f"Error starting game: {error}")
        return jsonify({"error": "Failed to start game"}), 500


@app.route("/api/restart", methods=["POST"])
def restart_game():
    try:
        get_session().restart()
        return _state_response()
    except Exception as error:
        logging.error(f"Error restarting game: {error}")
        return jsonify({"error": "Failed to restart game"}), 500


@app.route("/api/pause", methods=["POST"])
def pause_game():
    """Toggle between PLAYING and PAUSED."""
    try:
        get_session().pause()
        return _state_response()
    except Exception as error:
        logging.error(f"Error pausing game: {error}")
        return jsonify({"error": "Failed to pause game"}), 500


@app.route("/api/direction", methods=["POST"])
def submit_direction():
    """
    Submit a direction for the next tick.

    Body: {"direction": "UP"} or {"key": "ArrowUp"}.
    Reversals are dropped silently; the response reports whether the
    input was accepted.
    """
    body = _json_body()
    direction = body.get("direction")
    if direction is None and "key" in body:
        direction = direction_for_key(str(body["key"]))
    if not isinstance(direction, str) or direction.upper() not in VALID_MOVES:
        return jsonify({"error": f"Unknown direction: {body}"}), 400

    direction = direction.upper()
    accepted = get_session().submit_direction(direction)
    return jsonify({"direction": direction, "accepted": accepted}), 200


@app.route("/api/difficulty", methods=["POST"])
def set_difficulty():
    """
    Select the difficulty for the next game.

    Body: {"difficulty": "HARD"}. Ignored while a game is playing.
    """
    difficulty = str(_json_body().get("difficulty", "")).upper()
    if difficulty not in DIFFICULTY_CONFIG:
        return jsonify({"error": f"Unknown difficulty: '{difficulty}'"}), 400

    get_session().set_difficulty(difficulty)
    return _state_response()


@app.route("/api/difficulties", methods=["GET"])
def get_difficulties():
    return jsonify({"difficulties": DIFFICULTY_CONFIG}), 200


@app.route("/api/commentary", methods=["GET"])
def get_commentary():
    """Commentary stream for the current game, oldest first."""
    messages = [message.to_dict() for message in get_feed().messages]
    return jsonify({"messages": messages, "count": len(messages)}), 200


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(debug=os.getenv("FLASK_DEBUG"))
