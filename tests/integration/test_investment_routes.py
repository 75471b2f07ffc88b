import pytest


HEADERS = {"X-Account-Id": "user-1"}


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_invest_then_history_and_stats(client, seed_account):
    await seed_account("user-1", "500000")

    resp = await client.post(
        "/api/v1/investments",
        json={"category": "Bonds", "amount": "200,000"},
        headers=HEADERS,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["category"] == "Bonds"
    assert body["amount"] == 200000
    assert body["return_rate"] == 0.07
    assert body["expected_return"] == 14000
    assert body["balance_after"] == 300000
    assert body["message"] == "Successfully invested Rp200000 in Bonds"

    history = await client.get("/api/v1/investments/history", headers=HEADERS)
    assert history.status_code == 200
    items = history.json()["items"]
    assert len(items) == 1
    assert items[0]["id"] == body["investment_id"]
    assert items[0]["status"] == "active"

    stats = await client.get("/api/v1/investments/stats", headers=HEADERS)
    assert stats.status_code == 200
    assert stats.json() == {"total_invested": 200000, "total_returns": 0, "balance": 300000}


@pytest.mark.asyncio
@pytest.mark.e2e
@pytest.mark.parametrize(
    "amount, code",
    [
        ("", "EmptyOrNotANumber"),
        ("abc", "EmptyOrNotANumber"),
        ("0", "NotPositive"),
        ("50000", "BelowMinimum"),
        ("2000000000", "AboveMaximum"),
    ],
)
async def test_invalid_amount_is_rejected_before_transaction(client, seed_account, amount, code):
    await seed_account("user-1", "500000")

    resp = await client.post(
        "/api/v1/investments",
        json={"category": "Stocks", "amount": amount},
        headers=HEADERS,
    )

    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == code

    stats = await client.get("/api/v1/investments/stats", headers=HEADERS)
    assert stats.json()["balance"] == 500000


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_insufficient_balance(client, seed_account):
    await seed_account("user-1", "150000")

    resp = await client.post(
        "/api/v1/investments",
        json={"category": "Stocks", "amount": "200000"},
        headers=HEADERS,
    )

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "InsufficientBalance"
    assert detail["message"] == "Investment failed: Insufficient balance"
    assert detail["retryable"] is False


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_unknown_account(client):
    resp = await client.post(
        "/api/v1/investments",
        json={"category": "Stocks", "amount": "200000"},
        headers={"X-Account-Id": "ghost"},
    )
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "AccountNotFound"

    stats = await client.get("/api/v1/investments/stats", headers={"X-Account-Id": "ghost"})
    assert stats.status_code == 404


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_identity_header_is_required(client):
    resp = await client.post("/api/v1/investments", json={"category": "Stocks", "amount": "200000"})
    assert resp.status_code == 422

    resp = await client.get("/api/v1/investments/history", headers={"X-Account-Id": ""})
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_history_limit(client, seed_account):
    await seed_account("user-1", "1000000")
    for _ in range(3):
        resp = await client.post(
            "/api/v1/investments",
            json={"category": "Mutual Funds", "amount": "100000"},
            headers=HEADERS,
        )
        assert resp.status_code == 201

    resp = await client.get("/api/v1/investments/history?limit=2", headers=HEADERS)
    items = resp.json()["items"]
    assert len(items) == 2
    assert items[0]["id"] > items[1]["id"]

    resp = await client.get("/api/v1/investments/history?limit=0", headers=HEADERS)
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_options(client):
    resp = await client.get("/api/v1/investments/options")
    assert resp.status_code == 200
    options = {o["category"]: o for o in resp.json()["options"]}
    assert set(options) == {"Stocks", "Mutual Funds", "Bonds"}
    assert options["Stocks"]["return_rate"] == 0.15
    assert options["Bonds"]["min_amount"] == 100000
    assert options["Bonds"]["max_amount"] == 1000000000


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_health_and_ready(client):
    resp = await client.get("/api/v1/health")
    assert resp.json() == {"status": "ok"}

    resp = await client.get("/api/v1/ready")
    assert resp.json() == {"status": "ready", "db_connected": True}


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_sub_cent_amount_is_rejected(client, seed_account):
    await seed_account("user-1", "500000")

    resp = await client.post(
        "/api/v1/investments",
        json={"category": "Bonds", "amount": "150000.005"},
        headers=HEADERS,
    )

    assert resp.status_code == 422
    assert resp.json()["detail"] == {
        "code": "EmptyOrNotANumber",
        "message": "Please enter a valid amount",
    }
