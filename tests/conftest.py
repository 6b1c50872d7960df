import os
import tempfile

import pytest

from app import create_app
from app.models import db
from config import TestingConfig


@pytest.fixture
def app_instance():
    # Use a file-based sqlite DB to keep data across request contexts.
    db_fd, db_path = tempfile.mkstemp()

    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{db_path}"

    app = create_app(Config)
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()
        os.close(db_fd)
        os.unlink(db_path)


@pytest.fixture
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture
def signed_in_client(client):
    client.post("/auth/signup", json={"username": "neo"})
    return client
