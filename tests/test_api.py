import pytest
from fastapi.testclient import TestClient

from config import Settings
from startup_sim.app_layer.dependencies import get_game_service
from startup_sim.app_layer.game_service import GameService
from startup_sim.app_layer.main import app
from startup_sim.data_layer.game_repository import InMemoryGameRepository
from startup_sim.simulation_layer.randomness import SeededRandom

COMPANIES = "/api/v1/companies"


@pytest.fixture
def client():
    service = GameService(InMemoryGameRepository(), Settings(), rng=SeededRandom(1))
    app.dependency_overrides[get_game_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def company(client):
    response = client.post(COMPANIES, json={"name": "Acme", "business_type": "Tech", "funding_type": "Seed"})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_company(company):
    business = company["business"]

    assert business["cash"] == 1000000
    assert business["current_quarter"] == 1
    assert 3 <= len(company["competitors"]) <= 5
    assert len(company["decisions"]) == 3
    assert [a["title"] for a in company["advice"]] == ["Welcome", "Tech Strategy", "Funding Strategy"]
    assert company["financial_record"]["quarter"] == 1


def test_create_company_rejects_unknown_type(client):
    response = client.post(COMPANIES, json={"name": "Acme", "business_type": "Crypto", "funding_type": "Seed"})
    assert response.status_code == 422


def test_missing_company_is_404(client):
    response = client.get(f"{COMPANIES}/999")
    assert response.status_code == 404
    assert response.json()["error"] == "RecordNotFoundError"


def test_advance_quarter(client, company):
    business_id = company["business"]["id"]

    response = client.post(f"{COMPANIES}/{business_id}/advance")

    assert response.status_code == 200
    body = response.json()
    assert body["business"]["current_quarter"] == 2
    assert body["financial_record"]["quarter"] == 2
    assert len(client.get(f"{COMPANIES}/{business_id}/financials").json()) == 2
    assert client.get(f"{COMPANIES}/{business_id}/summary").json()["quarters"] == 2


def test_advance_with_selection_completes_decision(client, company):
    business_id = company["business"]["id"]
    decision_id = company["decisions"][0]["id"]

    response = client.post(f"{COMPANIES}/{business_id}/advance", json={"selections": {str(decision_id): 1}})
    assert response.status_code == 200

    pending = client.get(f"{COMPANIES}/{business_id}/decisions", params={"pending_only": True}).json()
    assert decision_id not in [d["id"] for d in pending]


def test_resolve_decision_then_conflict(client, company):
    business_id = company["business"]["id"]
    decision_id = company["decisions"][0]["id"]
    url = f"{COMPANIES}/{business_id}/decisions/{decision_id}/resolve"

    first = client.post(url, json={"option_id": 1})
    assert first.status_code == 200
    assert first.json()["decision"]["is_completed"]
    assert first.json()["business"]["product_progress"] == 20

    second = client.post(url, json={"option_id": 2})
    assert second.status_code == 409


def test_resolve_invalid_option_is_400(client, company):
    business_id = company["business"]["id"]
    decision_id = company["decisions"][0]["id"]

    response = client.post(f"{COMPANIES}/{business_id}/decisions/{decision_id}/resolve", json={"option_id": 9})

    assert response.status_code == 400
    assert client.get(f"{COMPANIES}/{business_id}").json()["cash"] == 1000000


def test_bulk_decisions(client, company):
    business_id = company["business"]["id"]
    payload = {"decisions": [{"type": "marketing", "decision": "content"}, {"type": "funding", "decision": "loan"}]}

    response = client.post(f"{COMPANIES}/{business_id}/decisions", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["company"]["cash"] == 1000000 - 25000 + 500000
    assert (body["next_quarter"], body["next_year"]) == (2, 1)
    assert [d["choice"] for d in body["decisions"]] == ["content", "loan"]
    assert all(d["quarter"] == 1 for d in body["decisions"])


def test_bulk_decisions_reject_unknown_choice(client, company):
    business_id = company["business"]["id"]
    payload = {"decisions": [{"type": "marketing", "decision": "content"}, {"type": "legal", "decision": "x"}]}

    response = client.post(f"{COMPANIES}/{business_id}/decisions", json=payload)

    assert response.status_code == 400
    assert client.get(f"{COMPANIES}/{business_id}").json()["current_quarter"] == 1


def test_bulk_decisions_require_at_least_one(client, company):
    response = client.post(f"{COMPANIES}/{company['business']['id']}/decisions", json={"decisions": []})
    assert response.status_code == 422


def test_recommendations(client, company):
    response = client.get(f"{COMPANIES}/{company['business']['id']}/recommendations")
    assert response.json() == {
        "marketing": "paid", "hiring": "none", "product": "mobile", "finance": "bootstrap",
    }


def test_resolve_event(client, company):
    business_id = company["business"]["id"]
    client.post(f"{COMPANIES}/{business_id}/decisions/{company['decisions'][0]['id']}/resolve", json={"option_id": 1})
    event_id = client.get(f"{COMPANIES}/{business_id}/events").json()[-1]["id"]

    response = client.post(f"/api/v1/events/{event_id}/resolve")

    assert response.status_code == 200
    assert response.json()["resolved"]
    active = client.get(f"{COMPANIES}/{business_id}/events", params={"active_only": True}).json()
    assert event_id not in [e["id"] for e in active]
    assert client.post("/api/v1/events/9999/resolve").status_code == 404


def test_leaderboard(client):
    # Tech opens at a 15000 loss, Service at a 5000 profit
    for name in ("One", "Two"):
        client.post(COMPANIES, json={"name": name, "business_type": "Tech", "funding_type": "Bootstrap"})
    client.post(COMPANIES, json={"name": "Three", "business_type": "Service", "funding_type": "Bootstrap"})

    entries = client.get("/api/v1/leaderboard", params={"limit": 2}).json()

    assert len(entries) == 2
    assert entries[0]["name"] == "Three"
    assert [e["rank"] for e in entries] == [1, 2]
