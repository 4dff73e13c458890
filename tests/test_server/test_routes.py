"""
Tests for the HTTP and WebSocket API.

AI seats are given a long think time so that only the requests made by a
test change the table.
"""

import pytest
from fastapi.testclient import TestClient

from holdem.core.rules import TableConfig
from holdem.server.app import create_app


@pytest.fixture
def client():
    """Heads-up table: the human seat 0 is dealer and acts first pre-flop."""
    app = create_app(TableConfig(player_count=2, ai_delay=60, equity_hints=False))
    with TestClient(app) as test_client:
        yield test_client


class TestStateRoutes:
    """Tests for state queries."""

    def test_initial_state(self, client):
        response = client.get("/state")
        assert response.status_code == 200

        data = response.json()
        assert data["phase"] == "PRE_DEAL"
        assert data["hand_number"] == 0
        assert len(data["players"]) == 2
        assert data["players"][0]["name"] == "You"

    def test_new_hand(self, client):
        data = client.post("/new_hand").json()

        assert data["phase"] == "PRE_FLOP"
        assert data["pot"] == 30
        assert data["current_player"] == 0
        assert len(data["players"][0]["cards"]) == 2
        assert data["players"][1]["cards"] is None
        assert [a["type"] for a in data["legal_actions"]] == ["FOLD", "CALL", "RAISE"]

    def test_state_for_other_seat(self, client):
        client.post("/new_hand")
        data = client.get("/state", params={"player_id": 1}).json()

        assert data["players"][0]["cards"] is None
        assert len(data["players"][1]["cards"]) == 2

    def test_legal_actions(self, client):
        client.post("/new_hand")
        data = client.get("/legal_actions", params={"player_id": 0}).json()

        assert data["player_id"] == 0
        assert data["actions"][1] == {"type": "CALL", "amount": 10, "min": None, "max": None}

    def test_legal_actions_default_to_seat_to_act(self, client):
        client.post("/new_hand")
        data = client.get("/legal_actions").json()
        assert data["player_id"] == 0
        assert data["actions"]

    def test_reset(self, client):
        client.post("/new_hand")
        data = client.post("/reset").json()

        assert data["phase"] == "PRE_DEAL"
        assert data["hand_number"] == 0
        assert all(p["stack"] == 1000 for p in data["players"])


class TestActionRoute:
    """Tests for POST /action."""

    def test_call(self, client):
        client.post("/new_hand")
        response = client.post("/action", json={"player_id": 0, "action": "CALL"})
        assert response.status_code == 200

        data = response.json()
        assert data["players"][0]["total_bet"] == 20
        assert data["current_player"] == 1
        assert data["messages"][-1] == "You calls 10."

    def test_lowercase_action(self, client):
        client.post("/new_hand")
        data = client.post("/action", json={"player_id": 0, "action": "raise", "amount": 100}).json()
        assert data["players"][0]["total_bet"] == 100

    def test_out_of_turn_is_ignored(self, client):
        before = client.post("/new_hand").json()
        data = client.post("/action", json={"player_id": 1, "action": "FOLD"}).json()

        assert data["version"] == before["version"]
        assert not data["players"][1]["is_folded"]

    def test_fold_ends_hand(self, client):
        client.post("/new_hand")
        data = client.post("/action", json={"player_id": 0, "action": "FOLD"}).json()

        assert data["phase"] == "SHOWDOWN"
        assert data["players"][1]["stack"] == 1010

    def test_unknown_action(self, client):
        client.post("/new_hand")
        response = client.post("/action", json={"player_id": 0, "action": "JUMP"})
        assert response.status_code == 400

    def test_unknown_player(self, client):
        client.post("/new_hand")
        response = client.post("/action", json={"player_id": 9, "action": "CALL"})
        assert response.status_code == 400

    def test_malformed_body(self, client):
        response = client.post("/action", json={"action": "CALL"})
        assert response.status_code == 422

    def test_negative_amount(self, client):
        response = client.post("/action", json={"player_id": 0, "action": "BET", "amount": -5})
        assert response.status_code == 422


class TestWebSocket:
    """Tests for the /ws channel."""

    def test_initial_state_pushed(self, client):
        with client.websocket_connect("/ws") as ws:
            message = ws.receive_json()
            assert message["type"] == "state"
            assert message["phase"] == "PRE_DEAL"

    def test_new_hand_broadcast(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "new_hand"})

            message = ws.receive_json()
            assert message["type"] == "state"
            assert message["phase"] == "PRE_FLOP"
            assert len(message["players"][0]["cards"]) == 2

    def test_action(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "new_hand"})
            ws.receive_json()

            ws.send_json({"type": "action", "action": "CALL"})
            message = ws.receive_json()
            assert message["players"][0]["total_bet"] == 20
            assert message["current_player"] == 1

    def test_get_state(self, client):
        with client.websocket_connect("/ws?player_id=1") as ws:
            ws.receive_json()
            ws.send_json({"type": "get_state"})
            message = ws.receive_json()
            assert message["type"] == "state"

    def test_http_changes_reach_socket(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            client.post("/new_hand")
            message = ws.receive_json()
            assert message["phase"] == "PRE_FLOP"

    def test_errors(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()

            ws.send_json({"type": "dance"})
            assert ws.receive_json() == {"type": "error", "message": "Unknown message type: dance"}

            ws.send_json({"type": "action", "action": "JUMP"})
            assert ws.receive_json()["type"] == "error"
