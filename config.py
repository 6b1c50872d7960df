import os
from dotenv import load_dotenv
from pathlib import Path

from levels import DEFAULT_SEED

load_dotenv()

basedir = Path(__file__).resolve().parent

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "fallback-dev-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{basedir / 'instance' / 'bughunt.sqlite'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"  # adjust to Strict if needed
    # In production, ensure you serve over HTTPS and set:
    # SESSION_COOKIE_SECURE = True
    # Seed for generated levels; changing it reshuffles every generated catalog.
    LEVEL_SEED = os.getenv("BH_LEVEL_SEED", DEFAULT_SEED)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LEVEL_SEED = "test-seed"
