import json
import os
import tempfile
import unittest

from app import create_app
from app.game import GameState
from app.models import StoredValue, db
from app.store import (
    PROGRESS_KEY,
    USER_KEY,
    DatabaseBackend,
    MemoryBackend,
    ProgressStore,
    User,
)
from config import TestingConfig


class MemoryStoreTestCase(unittest.TestCase):
    def setUp(self):
        self.backend = MemoryBackend()
        self.store = ProgressStore(self.backend)

    def test_progress_round_trip(self):
        self.store.save_progress([6, 1002, 6], GameState(score=350, streak=3, lives=2))
        progress = self.store.load_progress()
        self.assertEqual(progress.completed_levels, {6, 1002})
        self.assertEqual((progress.score, progress.streak, progress.lives), (350, 3, 2))

    def test_progress_document_layout(self):
        self.store.save_progress({7, 6}, GameState(score=10, streak=1, lives=3))
        doc = json.loads(self.backend.data[PROGRESS_KEY])
        self.assertEqual(doc, {"completedLevels": [6, 7], "score": 10, "streak": 1, "lives": 3})

    def test_user_round_trip_and_layout(self):
        user = User("trinity", email="t@example.com", avatar_id=4, joined_at=1700000000000)
        self.store.save_user(user)
        doc = json.loads(self.backend.data[USER_KEY])
        self.assertEqual(
            doc,
            {"username": "trinity", "email": "t@example.com", "avatarId": 4, "joinedAt": 1700000000000},
        )
        self.assertEqual(self.store.load_user(), user)

    def test_logout_keeps_progress(self):
        self.store.save_user(User("trinity"))
        self.store.save_progress({6}, GameState(score=100))
        self.store.logout_user()
        self.assertIsNone(self.store.load_user())
        self.assertEqual(self.store.load_progress().score, 100)

    def test_missing_fields_use_defaults(self):
        self.backend.data[PROGRESS_KEY] = json.dumps({"completedLevels": [1]})
        progress = self.store.load_progress()
        self.assertEqual((progress.score, progress.streak, progress.lives), (0, 0, 3))

    def test_corrupt_document_reads_as_absent(self):
        self.backend.data[PROGRESS_KEY] = "{not json"
        self.backend.data[USER_KEY] = json.dumps({"username": ""})
        with self.assertLogs("app.store", level="ERROR"):
            self.assertIsNone(self.store.load_progress())
            self.assertIsNone(self.store.load_user())

    def test_user_validation(self):
        with self.assertRaises(ValueError):
            User("   ")
        with self.assertRaises(ValueError):
            User("neo", avatar_id=9)
        self.assertEqual(User("neo").email, "")

    def test_user_rejects_non_text_fields(self):
        with self.assertRaises(ValueError):
            User(5)
        with self.assertRaises(ValueError):
            User("neo", email=["neo@example.com"])


class DatabaseStoreTestCase(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp()

        class Config(TestingConfig):
            SQLALCHEMY_DATABASE_URI = f"sqlite:///{self.db_path}"

        self.app = create_app(Config)
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.app_context.pop()
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def test_round_trip_and_overwrite(self):
        store = ProgressStore(DatabaseBackend("client-a"))
        store.save_progress({6}, GameState(score=100, streak=1, lives=3))
        store.save_progress({6, 7}, GameState(score=250, streak=2, lives=3))
        progress = store.load_progress()
        self.assertEqual(progress.completed_levels, {6, 7})
        self.assertEqual(progress.score, 250)
        self.assertEqual(StoredValue.query.filter_by(owner="client-a").count(), 1)

    def test_rows_are_scoped_per_client(self):
        ProgressStore(DatabaseBackend("client-a")).save_user(User("neo"))
        self.assertIsNone(ProgressStore(DatabaseBackend("client-b")).load_user())
        self.assertEqual(ProgressStore(DatabaseBackend("client-a")).load_user().username, "neo")

    def test_logout_deletes_only_the_user_row(self):
        store = ProgressStore(DatabaseBackend("client-a"))
        store.save_user(User("neo"))
        store.save_progress({6}, GameState())
        store.logout_user()
        keys = {row.key for row in StoredValue.query.filter_by(owner="client-a")}
        self.assertEqual(keys, {PROGRESS_KEY})

    def test_database_failure_is_swallowed(self):
        store = ProgressStore(DatabaseBackend("client-a"))
        db.drop_all()
        with self.assertLogs("app.store", level="ERROR"):
            store.save_progress({6}, GameState())
            self.assertIsNone(store.load_progress())


if __name__ == "__main__":
    unittest.main()
