import os
import tempfile
import unittest

from app import create_app
from app.models import StoredValue, db
from app.store import PROGRESS_KEY
from config import TestingConfig


class GameApiTestCase(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp()

        class Config(TestingConfig):
            SQLALCHEMY_DATABASE_URI = f"sqlite:///{self.db_path}"

        self.app = create_app(Config)
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()
        self.client = self.app.test_client()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.app_context.pop()
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def signup(self, username="neo", **extra):
        return self.client.post("/auth/signup", json={"username": username, **extra})

    def play_python(self):
        self.signup()
        return self.client.post("/api/game/language", json={"language": "python"})

    def test_game_requires_sign_in(self):
        resp = self.client.get("/api/game")
        self.assertEqual(resp.status_code, 401)

    def test_signup_validates_username(self):
        resp = self.signup(username="")
        self.assertEqual(resp.status_code, 400)
        resp = self.signup(avatarId=7)
        self.assertEqual(resp.status_code, 400)

    def test_signup_and_initial_game(self):
        resp = self.signup(email="neo@example.com", avatarId=3)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.get_json()["user"]["avatarId"], 3)

        state = self.client.get("/api/game").get_json()
        self.assertEqual(state["language"], "javascript")
        self.assertEqual(state["level"]["id"], 1)
        self.assertNotIn("bugLine", state["level"])
        self.assertEqual(state["state"]["gameStatus"], "playing")
        self.assertEqual(state["state"]["lives"], 3)
        self.assertIn("csrfToken", state)

    def test_correct_guess_scores_and_completes(self):
        state = self.play_python().get_json()
        self.assertEqual(state["level"]["title"], "Indentation Error")

        body = self.client.post("/api/game/guess", json={"line": 2}).get_json()
        self.assertTrue(body["correct"])
        self.assertEqual(body["points"], 100)
        self.assertEqual(body["state"]["score"], 100)
        self.assertEqual(body["state"]["gameStatus"], "level-complete")
        self.assertEqual(body["completedLevels"], [6])
        self.assertIn("indentation", body["explanation"])

        again = self.client.post("/api/game/guess", json={"line": 1}).get_json()
        self.assertTrue(again["ignored"])
        self.assertEqual(again["state"]["lives"], 3)

    def test_wrong_guess_costs_a_life(self):
        self.play_python()
        body = self.client.post("/api/game/guess", json={"line": 1}).get_json()
        self.assertFalse(body["correct"])
        self.assertFalse(body["gameOver"])
        self.assertEqual(body["state"]["lives"], 2)
        self.assertEqual(body["state"]["score"], 0)
        self.assertEqual(body["selectedLine"], 1)

    def test_progress_persisted_after_guess(self):
        self.play_python()
        self.client.post("/api/game/guess", json={"line": 2})
        row = StoredValue.query.filter_by(key=PROGRESS_KEY).one()
        self.assertIn('"score": 100', row.value)

    def test_next_retry_and_select(self):
        self.play_python()
        self.client.post("/api/game/guess", json={"line": 2})
        body = self.client.post("/api/game/next").get_json()
        self.assertFalse(body["exhausted"])
        self.assertEqual(body["level"]["id"], 7)

        body = self.client.post("/api/game/select", json={"levelId": 10}).get_json()
        self.assertEqual(body["state"]["currentLevelId"], 10)

        self.client.post("/api/game/guess", json={"line": 1})
        body = self.client.post("/api/game/retry").get_json()
        self.assertIsNone(body["selectedLine"])
        self.assertEqual(body["state"]["gameStatus"], "playing")
        self.assertEqual(body["state"]["lives"], 2)

    def test_next_at_end_of_catalog(self):
        self.play_python()
        levels = self.client.get("/api/levels/python").get_json()["levels"]
        self.client.post("/api/game/select", json={"levelId": levels[-1]["id"]})
        body = self.client.post("/api/game/next").get_json()
        self.assertTrue(body["exhausted"])
        self.assertEqual(body["state"]["currentLevelId"], levels[-1]["id"])

    def test_bad_requests(self):
        self.play_python()
        self.assertEqual(self.client.post("/api/game/select", json={"levelId": 1}).status_code, 404)
        self.assertEqual(self.client.post("/api/game/select", json={}).status_code, 400)
        self.assertEqual(self.client.post("/api/game/guess", json={"line": "two"}).status_code, 400)
        self.assertEqual(self.client.post("/api/game/language", json={"language": "cobol"}).status_code, 404)
        self.assertEqual(self.client.get("/api/levels/cobol").status_code, 404)

    def test_non_integer_fields_are_rejected(self):
        self.play_python()
        for line in (2.7, True, "2", None):
            resp = self.client.post("/api/game/guess", json={"line": line})
            self.assertEqual(resp.status_code, 400, line)
        self.assertEqual(self.client.post("/api/game/select", json={"levelId": 7.0}).status_code, 400)
        state = self.client.get("/api/game").get_json()["state"]
        self.assertEqual((state["lives"], state["currentLevelId"]), (3, 6))

    def test_malformed_bodies_are_client_errors(self):
        self.assertEqual(self.signup(username=5).status_code, 400)
        self.assertEqual(self.signup(email=["neo@example.com"]).status_code, 400)
        self.assertEqual(self.client.post("/auth/signup", json=["neo"]).status_code, 400)

        self.play_python()
        self.assertEqual(self.client.post("/api/game/language", json=["python"]).status_code, 404)
        self.assertEqual(self.client.post("/api/game/select", json=[6]).status_code, 400)
        self.assertEqual(self.client.post("/api/game/guess", json="2").status_code, 400)

    def test_level_list_marks_completions(self):
        self.play_python()
        self.client.post("/api/game/guess", json={"line": 2})
        body = self.client.get("/api/levels/python").get_json()
        self.assertEqual(body["totalLevels"], 50)
        self.assertEqual(body["completedCount"], 1)
        self.assertTrue(body["levels"][0]["isCompleted"])
        self.assertNotIn("solution", body["levels"][0])

    def test_game_over_and_restart(self):
        self.play_python()
        for _ in range(3):
            body = self.client.post("/api/game/guess", json={"line": 1}).get_json()
        self.assertTrue(body["gameOver"])
        self.assertEqual(body["state"]["gameStatus"], "gameover")

        body = self.client.post("/api/game/next").get_json()
        self.assertEqual(body["state"]["gameStatus"], "gameover")

        body = self.client.post("/api/game/restart").get_json()
        self.assertEqual(body["state"]["gameStatus"], "playing")
        self.assertEqual(body["state"]["lives"], 3)

    def test_logout_keeps_progress_for_next_sign_in(self):
        self.play_python()
        self.client.post("/api/game/guess", json={"line": 2})
        self.assertEqual(self.client.post("/auth/logout").status_code, 200)
        self.assertEqual(self.client.get("/api/game").status_code, 401)
        self.assertEqual(self.client.get("/auth/me").status_code, 401)

        self.signup(username="neo")
        body = self.client.get("/api/game").get_json()
        self.assertEqual(body["state"]["score"], 100)
        self.assertEqual(body["completedLevels"], [6])
        self.assertEqual(body["language"], "python")

    def test_profile_and_leaderboard(self):
        self.play_python()
        self.client.post("/api/game/guess", json={"line": 2})
        profile = self.client.get("/api/profile").get_json()
        self.assertEqual(profile["user"]["username"], "neo")
        self.assertEqual(profile["bugsFixed"], 1)
        self.assertEqual(profile["badges"], ["Bug Hunter"])

        board = self.client.get("/api/leaderboard").get_json()
        self.assertTrue(board["mocked"])
        self.assertEqual(board["entries"][0]["name"], "BugSlayer99")

    def test_languages(self):
        body = self.client.get("/api/languages").get_json()
        self.assertIn("python", body["languages"])
        self.assertEqual(len(body["languages"]), 15)


class CsrfTestCase(unittest.TestCase):
    def test_post_without_token_is_rejected(self):
        class Config(TestingConfig):
            WTF_CSRF_ENABLED = True

        app = create_app(Config)
        resp = app.test_client().post("/auth/signup", json={"username": "neo"})
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
