"""
Connect Four Web Interface

A Flask web application for playing two-player Connect Four in the browser.
The page posts column clicks; every rule decision is made by the Game session.
"""

import logging
import re
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from flask import Flask, render_template, request, jsonify, session

from connect_four import config
from connect_four.engine import Player
from connect_four.errors import GameAlreadyOver, InvalidMove
from connect_four.game import Game, MoveResult

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass
class GameSession:
    """A game plus the lock that serializes moves made on it."""

    game: Game
    lock: threading.Lock = field(default_factory=threading.Lock)


# Global storage for game sessions, keyed by the id kept in the session cookie.
# Least recently used entries are evicted past config.MAX_GAMES.
games: "OrderedDict[str, GameSession]" = OrderedDict()
_games_lock = threading.Lock()


def create_game(p1_color: str = config.P1_COLOR, p2_color: str = config.P2_COLOR,
                height: int = config.BOARD_HEIGHT, width: int = config.BOARD_WIDTH) -> GameSession:
    """Build a fresh game and make it the session's current game."""
    entry = GameSession(Game([Player(p1_color, 1), Player(p2_color, 2)], height, width))
    game_id = uuid.uuid4().hex
    old_id = session.get('game_id')

    with _games_lock:
        if old_id is not None:
            games.pop(old_id, None)
        games[game_id] = entry
        while len(games) > config.MAX_GAMES:
            evicted_id, _ = games.popitem(last=False)
            logger.info("Evicted game %s", evicted_id)

    session['game_id'] = game_id
    logger.info("Started game %s (%dx%d)", game_id, height, width)
    return entry


def get_session() -> GameSession:
    """Get or create the game session for the current client."""
    game_id = session.get('game_id')
    with _games_lock:
        entry = games.get(game_id) if game_id is not None else None
        if entry is not None:
            games.move_to_end(game_id)
    if entry is None:
        return create_game()
    return entry


def locked_move(entry: GameSession, col: int) -> Tuple[MoveResult, Dict[str, Any]]:
    """Apply a move and serialize the result while holding the game's lock."""
    with entry.lock:
        result = entry.game.attempt_move(col)
        response = serialize_game_state(entry.game)
        response['move'] = serialize_move(result)
        response['message'] = entry.game.end_message()
    return result, response


def json_body() -> Optional[Dict[str, Any]]:
    """The request's JSON object, {} when absent, or None if it is not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


def serialize_player(player: Optional[Player]) -> Optional[Dict[str, Any]]:
    if player is None:
        return None
    return {'num': player.num, 'color': player.color}


def serialize_game_state(game: Game) -> Dict[str, Any]:
    """Convert game state to JSON-serializable format."""
    return {
        'board': game.board.to_list(),
        'height': game.height,
        'width': game.width,
        'players': [serialize_player(p) for p in game.players],
        'current_player': serialize_player(game.current_player),
        'state': game.state.value,
        'is_over': game.is_over(),
        'winner': serialize_player(game.winner()),
    }


def serialize_move(result: MoveResult) -> Dict[str, Any]:
    return {
        'accepted': result.accepted,
        'row': result.row,
        'column': result.column,
        'player': serialize_player(result.player),
        'outcome': result.outcome.value,
        'winner': serialize_player(result.winner),
    }


@app.route('/')
def index():
    """Main game page."""
    return render_template(
        'index.html',
        p1_color=config.P1_COLOR,
        p2_color=config.P2_COLOR,
    )


@app.route('/api/game/state')
def get_game_state():
    """Get current game state."""
    entry = get_session()
    with entry.lock:
        return jsonify(serialize_game_state(entry.game))


@app.route('/api/game/move', methods=['POST'])
def make_move():
    """Make a move in the game."""
    data = json_body()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    col = data.get('col')

    if col is None:
        return jsonify({'error': 'Column not specified'}), 400
    if isinstance(col, bool) or not isinstance(col, int):
        return jsonify({'error': 'Column must be an integer'}), 400

    try:
        _, response = locked_move(get_session(), col)
    except GameAlreadyOver as e:
        return jsonify({'error': str(e)}), 409
    except InvalidMove as e:
        logger.info("Invalid move in column %s: %s", col, e)
        return jsonify({'error': str(e)}), 400

    return jsonify(response)


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Create a new game with specified settings."""
    data = json_body()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    p1_color = data.get('p1_color', config.P1_COLOR)
    p2_color = data.get('p2_color', config.P2_COLOR)
    height = data.get('height', config.BOARD_HEIGHT)
    width = data.get('width', config.BOARD_WIDTH)

    # Validate parameters
    for color in (p1_color, p2_color):
        if not isinstance(color, str) or not COLOR_RE.match(color):
            return jsonify({'error': 'Colors must look like #rrggbb'}), 400
    for dim in (height, width):
        if isinstance(dim, bool) or not isinstance(dim, int):
            return jsonify({'error': 'Board dimensions must be integers'}), 400

    try:
        entry = create_game(p1_color, p2_color, height, width)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify(serialize_game_state(entry.game))


def main() -> None:
    config.configure_logging()
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)


if __name__ == '__main__':
    main()
