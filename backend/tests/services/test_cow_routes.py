"""Cow Routes — HTTP surface for count, beckon, and list.

Invariants:
    - GET /cows/count returns the count as plain text
    - POST /cows/beckon validates count in [1, 5] (400 VALIDATION_ERROR otherwise)
    - Full meadow → 409 CAPACITY_EXHAUSTED; storage failures → 500/503 envelopes
    - GET /cows/list returns every cow in id order
"""

from cowchat.core.catalogs import CATALOG_SIZE, COW_NAMES
from cowchat.core.errors import ServiceUnavailableError

from tests.services.fakes import make_test_cow


async def test_count_empty_meadow(client):
    res = await client.get("/cows/count")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text == "0"


async def test_count_seeded_meadow(client, seed_cows):
    res = await client.get("/cows/count")
    assert res.text == "2"


async def test_beckon_creates_cows(client):
    res = await client.post("/cows/beckon", json={"count": 3})
    assert res.status_code == 200
    cows = res.json()["cows"]
    assert len(cows) == 3
    assert [c["id"] for c in cows] == [1, 2, 3]
    for cow in cows:
        assert cow["name"] in COW_NAMES
        assert cow["color"] in {"black", "brown", "tan", "black and white patches"}
        assert 5 <= cow["age"] <= 30
        assert 1300 <= cow["weight"] <= 1800


async def test_beckon_then_list_returns_old_and_new(client, seed_cows):
    res = await client.post("/cows/beckon", json={"count": 2})
    new = res.json()["cows"]
    assert [c["id"] for c in new] == [3, 4]

    listed = (await client.get("/cows/list")).json()["cows"]
    assert [c["id"] for c in listed] == [1, 2, 3, 4]
    assert {c["name"] for c in listed} == {"Bessie", "Daisy"} | {c["name"] for c in new}


async def test_beckon_rejects_out_of_range_counts(client):
    for count in (0, 6, -1):
        res = await client.post("/cows/beckon", json={"count": count})
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await client.get("/cows/count")).text == "0"


async def test_beckon_rejects_missing_count(client):
    res = await client.post("/cows/beckon", json={})
    assert res.status_code == 400


async def test_list_empty_meadow(client):
    res = await client.get("/cows/list")
    assert res.status_code == 200
    assert res.json() == {"cows": []}


async def test_full_meadow_returns_capacity_exhausted(fake_client, fake_repo):
    for i, name in enumerate(sorted(COW_NAMES)):
        fake_repo.cows[name] = make_test_cow(name, i + 1)
    res = await fake_client.post("/cows/beckon", json={"count": 1})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CAPACITY_EXHAUSTED"
    assert await fake_repo.count() == CATALOG_SIZE


async def test_beckon_near_capacity_returns_fewer(fake_client, fake_repo):
    for i, name in enumerate(sorted(COW_NAMES)[:CATALOG_SIZE - 2]):
        fake_repo.cows[name] = make_test_cow(name, i + 1)
    res = await fake_client.post("/cows/beckon", json={"count": 5})
    assert res.status_code == 200
    assert len(res.json()["cows"]) == 2


async def test_query_failure_is_generic_500(fake_client, fake_repo):
    fake_repo.fail_reads = True
    res = await fake_client.get("/cows/count")
    assert res.status_code == 500
    body = res.json()["error"]
    assert body["code"] == "QUERY_FAILED"
    assert "sqlite" not in body["message"].lower()


async def test_write_failure_is_500(fake_client, fake_repo):
    fake_repo.fail_writes = True
    res = await fake_client.post("/cows/beckon", json={"count": 2})
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "WRITE_FAILED"


async def test_pool_exhaustion_is_503(fake_client, fake_repo, monkeypatch):
    async def exhausted():
        raise ServiceUnavailableError("connection pool exhausted")

    monkeypatch.setattr(fake_repo, "list_cows", exhausted)
    res = await fake_client.get("/cows/list")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


async def test_health_liveness(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_health_readiness(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
