from flask import Flask
from config import Config
from flask_login import LoginManager
from flask_wtf import CSRFProtect
from werkzeug.middleware.proxy_fix import ProxyFix
from .models import db
import os

login_manager = LoginManager()
csrf = CSRFProtect()

def create_app(config_class=Config):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # ensure instance folder exists
    os.makedirs(os.path.join(app.instance_path), exist_ok=True)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    csrf.init_app(app)

    from .auth.routes import auth_bp
    from .main.routes import main_bp
    from .utils import client_store

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)

    @login_manager.user_loader
    def load_user(user_id):
        user = client_store().load_user()
        if user is not None and user.get_id() == user_id:
            return user
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return {"error": "Sign in to play."}, 401

    with app.app_context():
        db.create_all()

    return app
