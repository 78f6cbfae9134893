import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from castgraph.services import RelationshipGraphService
from castgraph.web.main import app
from castgraph.web.routes import get_service

BASE = "/api/projects/p1/relationships"

DUEL_PAYLOAD = {
    "characters": [{"name": "Ana"}, {"name": "Ben"}],
    "scenes": [
        {
            "sequenceNumber": 1,
            "rawIdea": 'Ana: "I trust you, Ben." They fought side by side against the soldiers.',
        },
        {"sequenceNumber": 2, "rawIdea": "Ben attacked Ana in a fit of rage, screaming threats."},
    ],
}


@pytest_asyncio.fixture
async def client(store):
    app.dependency_overrides[get_service] = lambda: RelationshipGraphService(store)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def test_health():
    # No context manager: the lifespan (migrations) is not run.
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_get_without_analysis_is_404(client):
    response = await client.get(BASE)
    assert response.status_code == 404


async def test_analyze_then_get(client):
    response = await client.post(f"{BASE}/analyze", json=DUEL_PAYLOAD)
    assert response.status_code == 200
    body = response.json()
    assert body["analysisMethod"] == "keyword"
    assert body["reused"] is False
    assert body["relationships"] == [
        {
            "character1": "Ana",
            "character2": "Ben",
            "strength": 1.0,
            "scenes": [1, 2],
            "type": "enemies",
            "description": None,
        }
    ]

    again = await client.post(f"{BASE}/analyze", json={"characters": [], "scenes": []})
    assert again.json()["reused"] is True
    assert again.json()["relationships"] == body["relationships"]

    stored = await client.get(BASE)
    assert stored.status_code == 200
    assert stored.json()["relationships"] == body["relationships"]


async def test_forced_analysis_replaces_stored_set(client):
    await client.post(
        BASE,
        json={
            "relationships": [{"character1": "Cal", "character2": "Dee", "strength": 0.2}],
            "analysisMethod": "ai",
        },
    )
    response = await client.post(f"{BASE}/analyze", json={**DUEL_PAYLOAD, "force": True})
    body = response.json()
    assert body["analysisMethod"] == "keyword"
    assert [(r["character1"], r["character2"]) for r in body["relationships"]] == [("Ana", "Ben")]


async def test_save_and_filter(client):
    payload = {
        "relationships": [
            {"character1": "Ana", "character2": "Ben", "strength": 1, "scenes": [1], "type": "allies"},
            {"character1": "Ben", "character2": "Cal", "strength": 0.5, "scenes": [2], "type": "enemies"},
        ],
        "analysisMethod": "ai",
    }
    created = await client.post(BASE, json=payload)
    assert created.status_code == 201
    assert created.json()["analysisMethod"] == "ai"

    enemies = await client.get(BASE, params={"type": "enemies"})
    assert [r["character2"] for r in enemies.json()["relationships"]] == ["Cal"]

    for_ana = await client.get(BASE, params={"character": "ana"})
    assert [r["character2"] for r in for_ana.json()["relationships"]] == ["Ben"]


async def test_save_duplicate_pairs_is_400(client):
    payload = {
        "relationships": [
            {"character1": "Ana", "character2": "Ben"},
            {"character1": "Ben", "character2": "Ana"},
        ]
    }
    response = await client.post(BASE, json=payload)
    assert response.status_code == 400
    assert "duplicate" in response.json()["detail"]


async def test_save_self_pair_is_422(client):
    response = await client.post(
        BASE, json={"relationships": [{"character1": "Ana", "character2": "Ana"}]}
    )
    assert response.status_code == 422


async def test_delete_clears(client):
    await client.post(f"{BASE}/analyze", json=DUEL_PAYLOAD)
    response = await client.delete(BASE)
    assert response.json() == {"deleted": 1}
    assert (await client.get(BASE)).status_code == 404


async def test_save_failure_is_500(client, store, monkeypatch):
    from castgraph.core.errors import RelationshipSaveError

    async def failing_save(project_id, relationships, method):
        raise RelationshipSaveError(project_id, "connection lost")

    monkeypatch.setattr(store, "save", failing_save)
    response = await client.post(
        BASE, json={"relationships": [{"character1": "Ana", "character2": "Ben"}]}
    )
    assert response.status_code == 500
    assert "connection lost" in response.json()["detail"]
