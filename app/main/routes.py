from flask import Blueprint, abort, current_app, request
from flask_login import current_user, login_required
from flask_wtf.csrf import generate_csrf

from levels import Language, levels_for
from ..game import UnknownLevel
from ..utils import client_store, current_game, remember_game

main_bp = Blueprint("main", __name__, url_prefix="/api")

SUCCESS_MESSAGE = "BUG DETECTED! Patch applied successfully. System stabilizing..."
FAILURE_MESSAGE = "CRITICAL ERROR: Analysis failed. No anomaly detected at this vector."
EXHAUSTED_MESSAGE = "You've completed all levels for this language!"

# No real multi-user board yet; these rows stand in for one.
MOCK_LEADERBOARD = [
    {"rank": 1, "name": "BugSlayer99", "score": 154200, "streak": 42, "lang": "Python"},
    {"rank": 2, "name": "NullPointer", "score": 128500, "streak": 15, "lang": "Java"},
    {"rank": 3, "name": "CSS_Wizard", "score": 98200, "streak": 28, "lang": "CSS"},
    {"rank": 4, "name": "Rustacean", "score": 85000, "streak": 8, "lang": "Rust"},
    {"rank": 5, "name": "ConsoleLog", "score": 72100, "streak": 12, "lang": "JS"},
]


def _language_or_404(value):
    try:
        return Language(value)
    except ValueError:
        abort(404)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data, name):
    value = data.get(name)
    # bool is an int subclass; JSON true must not pass as 1
    if isinstance(value, bool) or not isinstance(value, int):
        abort(400, description=f"{name} must be an integer.")
    return value


def _game_payload(game, **extra):
    payload = game.to_dict()
    payload["csrfToken"] = generate_csrf()
    payload.update(extra)
    return payload


@main_bp.get("/languages")
def languages():
    return {"languages": [lang.value for lang in Language]}


@main_bp.get("/levels/<language>")
@login_required
def level_list(language):
    """Catalog for one language with completion marks; answers stay hidden."""
    lang = _language_or_404(language)
    levels = levels_for(lang, seed=current_app.config["LEVEL_SEED"])
    progress = client_store().load_progress()
    done = progress.completed_levels if progress else set()
    entries = []
    for level in levels:
        entry = level.to_dict(include_answer=False)
        entry["isCompleted"] = level.id in done
        entries.append(entry)
    return {
        "language": lang.value,
        "levels": entries,
        "completedCount": sum(1 for e in entries if e["isCompleted"]),
        "totalLevels": len(entries),
    }


@main_bp.get("/game")
@login_required
def game_state():
    return _game_payload(current_game())


@main_bp.post("/game/language")
@login_required
def change_language():
    lang = _language_or_404(_json_body().get("language"))
    game = current_game()
    game.change_language(lang)
    remember_game(game)
    return _game_payload(game)


@main_bp.post("/game/select")
@login_required
def select_level():
    level_id = _int_field(_json_body(), "levelId")
    game = current_game()
    try:
        game.select_level(level_id)
    except UnknownLevel:
        abort(404)
    remember_game(game)
    return _game_payload(game)


@main_bp.post("/game/guess")
@login_required
def guess():
    line = _int_field(_json_body(), "line")
    game = current_game()
    result = game.guess_line(line)
    remember_game(game)
    if result is None:
        return _game_payload(game, ignored=True)
    if result.correct:
        return _game_payload(
            game,
            correct=True,
            points=result.points,
            message=SUCCESS_MESSAGE,
            solution=result.level.solution,
            explanation=result.level.explanation,
        )
    return _game_payload(
        game,
        correct=False,
        points=result.points,
        message=FAILURE_MESSAGE,
        gameOver=result.game_over,
    )


@main_bp.post("/game/next")
@login_required
def next_level():
    game = current_game()
    level = game.advance_level()
    remember_game(game)
    if level is None:
        return _game_payload(game, exhausted=True, message=EXHAUSTED_MESSAGE)
    return _game_payload(game, exhausted=False)


@main_bp.post("/game/retry")
@login_required
def retry():
    game = current_game()
    game.retry()
    remember_game(game)
    return _game_payload(game)


@main_bp.post("/game/restart")
@login_required
def restart():
    game = current_game()
    game.restart()
    remember_game(game)
    current_app.logger.info("%s restarted their session", current_user.username)
    return _game_payload(game)


@main_bp.get("/profile")
@login_required
def profile():
    game = current_game()
    completed = len(game.completed_levels)
    badges = ["Bug Hunter"]
    if game.state.streak > 10:
        badges.append("On Fire")
    if completed > 20:
        badges.append("Senior Dev")
    return {
        "user": current_user.to_dict(),
        "bugsFixed": completed,
        "score": game.state.score,
        "streak": game.state.streak,
        "badges": badges,
    }


@main_bp.get("/leaderboard")
def leaderboard():
    return {"entries": MOCK_LEADERBOARD, "mocked": True}
