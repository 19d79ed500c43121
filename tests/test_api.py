import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client(dictionary):
    main.app.dependency_overrides[main.get_dictionary] = lambda: dictionary
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
    main.games.clear()
    main.game_locks.clear()


def start(client, *participants, seed=3):
    response = client.post("/api/games", json={"participants": list(participants), "seed": seed})
    assert response.status_code == 200
    return response.json()


ALICE = {"player_id": "alice", "name": "Alice"}
HAL = {"player_id": "hal", "name": "HAL", "kind": "computer"}


class TestGameFlow:

    def test_create_game(self, client):
        state = start(client, ALICE, HAL)
        assert state["current_player"] == "alice"
        assert state["first_move"]
        assert state["tiles_in_bag"] == 86
        assert len(state["board"]) == 15
        assert [len(p["rack"]) for p in state["players"]] == [7, 7]

    def test_computer_opening_move(self, client):
        state = start(client, HAL, ALICE)
        assert state["current_player"] == "alice"
        assert state["message"].startswith("New game started. || ")

    def test_pass_lets_computer_reply(self, client):
        game_id = start(client, ALICE, HAL)["game_id"]
        response = client.post(f"/api/games/{game_id}/pass", json={"player_id": "alice"})
        assert response.status_code == 200
        state = response.json()
        assert state["current_player"] == "alice"
        assert state["message"].startswith("Alice passed. || ")

    def test_get_state(self, client):
        game_id = start(client, ALICE, HAL)["game_id"]
        response = client.get(f"/api/games/{game_id}")
        assert response.status_code == 200
        assert response.json()["game_id"] == game_id

    def test_move(self, client, give_rack):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        give_rack(main.games[game_id], "alice", "CATEEIO")
        response = client.post(f"/api/games/{game_id}/move", json={
            "player_id": "alice", "row": 7, "col": 6, "direction": "horizontal",
            "tiles": ["C", "A", "T"],
        })
        assert response.status_code == 200
        state = response.json()
        assert state["scores"] == {"alice": 10, "bob": 0}
        assert state["board"][7][6:9] == ["C", "A", "T"]
        assert state["current_player"] == "bob"
        assert not state["first_move"]

    def test_exchange(self, client):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        rack = [t.model_dump() for t in main.games[game_id].players[0].rack]
        rack[0]["selected_for_swap"] = True
        rack[1]["selected_for_swap"] = True
        response = client.post(f"/api/games/{game_id}/exchange",
                               json={"player_id": "alice", "rack": rack})
        assert response.status_code == 200
        assert response.json()["last_move"] == "Alice exchanged 2 tile(s)."

    def test_resign(self, client):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        response = client.post(f"/api/games/{game_id}/resign", json={"player_id": "alice"})
        state = response.json()
        assert state["game_over"]
        assert state["status"]["winner_id"] == "bob"
        assert state["status"]["reason"] == "resignation"


class TestErrors:

    def test_unknown_game(self, client):
        assert client.get("/api/games/nope").status_code == 404
        assert client.post("/api/games/nope/pass", json={"player_id": "alice"}).status_code == 404

    def test_wrong_player(self, client):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        response = client.post(f"/api/games/{game_id}/pass", json={"player_id": "bob"})
        assert response.status_code == 400
        assert "turn" in response.json()["detail"]

    def test_invalid_word_keeps_state(self, client, give_rack):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        give_rack(main.games[game_id], "alice", "CATEEIO")
        before = main.games[game_id].to_snapshot()
        response = client.post(f"/api/games/{game_id}/move", json={
            "player_id": "alice", "row": 7, "col": 6, "direction": "horizontal",
            "tiles": ["T", "C", "A"],
        })
        assert response.status_code == 400
        assert response.json()["detail"] == "'TCA' is not a valid word."
        assert main.games[game_id].to_snapshot() == before

    def test_bad_letter(self, client):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        response = client.post(f"/api/games/{game_id}/move", json={
            "player_id": "alice", "row": 7, "col": 7, "direction": "horizontal", "tiles": ["1"],
        })
        assert response.status_code == 400

    def test_exchange_without_selection(self, client):
        game_id = start(client, ALICE, {"player_id": "bob"})["game_id"]
        rack = [t.model_dump() for t in main.games[game_id].players[0].rack]
        response = client.post(f"/api/games/{game_id}/exchange",
                               json={"player_id": "alice", "rack": rack})
        assert response.status_code == 400

    def test_one_player_is_rejected(self, client):
        response = client.post("/api/games", json={"participants": [ALICE]})
        assert response.status_code == 422

    def test_duplicate_players_are_rejected(self, client):
        response = client.post("/api/games", json={"participants": [ALICE, ALICE]})
        assert response.status_code == 400
