from uuid import uuid4

from flask import current_app, session
from flask_login import current_user

from levels import Language
from .game import GameSession, GameStatus
from .store import DatabaseBackend, ProgressStore

CLIENT_KEY = "bh_client"
LANGUAGE_KEY = "bh_language"
GAME_KEY = "bh_game"
DEFAULT_LANGUAGE = Language.JAVASCRIPT


def client_store():
    """Storage for the calling browser, identified by a random id in its session cookie."""
    if CLIENT_KEY not in session:
        session[CLIENT_KEY] = uuid4().hex
        session.permanent = True
    return ProgressStore(DatabaseBackend(session[CLIENT_KEY]))


def current_game():
    """Rebuild the caller's game: progress from the store, level cursor from the cookie."""
    store = client_store()
    user = current_user._get_current_object() if current_user.is_authenticated else None
    game = GameSession.restore(
        session.get(LANGUAGE_KEY, DEFAULT_LANGUAGE.value),
        store.load_progress(),
        store=store,
        user=user,
        seed=current_app.config["LEVEL_SEED"],
    )
    saved = session.get(GAME_KEY)
    if saved and game.find(saved.get("levelId")) is not None:
        game.state.current_level_id = saved["levelId"]
        game.state.game_status = GameStatus(saved.get("status", GameStatus.PLAYING.value))
        game.selected_line = saved.get("selectedLine")
        game.load_token = saved.get("loadToken", 0)
        if game.state.lives == 0:
            game.state.game_status = GameStatus.GAMEOVER
    else:
        game.start()
        remember_game(game)
    return game


def remember_game(game):
    session[LANGUAGE_KEY] = game.language.value
    session[GAME_KEY] = {
        "levelId": game.state.current_level_id,
        "status": game.state.game_status.value,
        "selectedLine": game.selected_line,
        "loadToken": game.load_token,
    }
