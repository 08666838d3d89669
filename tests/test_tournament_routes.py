"""Tests for the tournament blueprint routes."""

import unittest

from matchmaster import create_app
from matchmaster.audit.writer import MemoryAuditLog
from matchmaster.store.memory import MemoryEntityStore
from tests.conftest import ADMIN, LEADER, PLAYER, StaticIdentityProvider, tournament_doc


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TournamentRoutesTestCase(unittest.TestCase):
    def setUp(self):
        self.store = MemoryEntityStore()
        self.store.put_tournament("t1", tournament_doc(max_participants=2))
        self.store.put_tournament("t2", tournament_doc(status="active"))
        self.app = create_app(
            {"TESTING": True, "STORE_BACKEND": "memory"},
            store=self.store,
            audit_log=MemoryAuditLog(),
            identity=StaticIdentityProvider(
                {"player": PLAYER, "leader": LEADER, "admin": ADMIN}
            ),
        )
        self.client = self.app.test_client()

    def test_join_requires_token(self):
        response = self.client.post("/tournaments/t1/join")
        self.assertEqual(response.status_code, 401)
        body = response.get_json()
        self.assertFalse(body["success"])
        self.assertEqual(body["code"], "UNAUTHENTICATED")
        self.assertIsNone(body["data"])

    def test_join_with_bad_token(self):
        response = self.client.post("/tournaments/t1/join", headers=_auth("nope"))
        self.assertEqual(response.status_code, 401)

    def test_join_and_leave(self):
        response = self.client.post("/tournaments/t1/join", headers=_auth("player"))
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Successfully joined the tournament.")
        self.assertEqual(body["data"]["participants"], ["player_uid"])
        self.assertEqual(body["data"]["participants_count"], 1)

        response = self.client.post("/tournaments/t1/join", headers=_auth("player"))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["code"], "ALREADY_REGISTERED")

        response = self.client.post("/tournaments/t1/leave", headers=_auth("player"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["data"]["participants"], [])

        response = self.client.post("/tournaments/t1/leave", headers=_auth("player"))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["code"], "NOT_REGISTERED")

    def test_full_tournament(self):
        self.client.post("/tournaments/t1/join", headers=_auth("player"))
        self.client.post("/tournaments/t1/join", headers=_auth("leader"))
        response = self.client.post("/tournaments/t1/join", headers=_auth("admin"))
        self.assertEqual(response.status_code, 409)
        body = response.get_json()
        self.assertEqual(body["code"], "FULL")
        self.assertEqual(body["message"], "Tournament is full.")

    def test_join_active_tournament(self):
        response = self.client.post("/tournaments/t2/join", headers=_auth("player"))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["code"], "INVALID_STATE")

    def test_unknown_tournament(self):
        response = self.client.post("/tournaments/zzz/join", headers=_auth("player"))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["code"], "NOT_FOUND")

    def test_view_tournament(self):
        response = self.client.get("/tournaments/t1", headers=_auth("player"))
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["data"]["id"], "t1")
        self.assertEqual(body["data"]["status"], "registration")

    def test_malformed_tournament_record(self):
        self.store.put_tournament("t3", tournament_doc(max_participants="many"))
        response = self.client.post("/tournaments/t3/join", headers=_auth("player"))
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.get_json()["code"], "STORE_ERROR")

    def test_join_is_post_only(self):
        response = self.client.get("/tournaments/t1/join", headers=_auth("player"))
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.get_json()["code"], "METHOD_NOT_ALLOWED")


if __name__ == "__main__":
    unittest.main()
