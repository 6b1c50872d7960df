from flask import Blueprint, current_app, request, session
from flask_login import current_user, login_required, login_user, logout_user

from ..store import User
from ..utils import GAME_KEY, client_store

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/signup")
def signup():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    try:
        user = User(
            username=data.get("username", ""),
            email=data.get("email", ""),
            avatar_id=int(data.get("avatarId", 1)),
        )
    except (TypeError, ValueError) as e:
        return {"error": str(e)}, 400

    client_store().save_user(user)
    login_user(user, remember=True)
    session.pop(GAME_KEY, None)  # start fresh on the first level
    current_app.logger.info("Signed in %s", user.username)
    return {"user": user.to_dict()}, 201


@auth_bp.post("/logout")
@login_required
def logout():
    # progress stays in the store for the next sign-in
    client_store().logout_user()
    logout_user()
    return {"message": "Logged out."}


@auth_bp.get("/me")
def me():
    if not current_user.is_authenticated:
        return {"user": None}, 401
    return {"user": current_user.to_dict()}
