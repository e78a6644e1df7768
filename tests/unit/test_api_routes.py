"""Router tests: HTTP surface over in-memory services via dependency overrides."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.auc_bid.application.service import BidLedgerService, get_bid_ledger_service
from src.auc_common.database import get_db_session
from src.auc_gateway.auth.jwt_handler import create_access_token
from src.auc_lot.application.service import LotApplicationService, get_lot_service
from src.auc_settlement.application.consistency import (
    ConsistencyService,
    get_consistency_service,
)
from src.auc_settlement.application.service import SettlementService, get_settlement_service
from src.main import app
from tests.unit.factories import NOW, make_bid, make_lot

ALICE = {"Authorization": f"Bearer {create_access_token('user-alice', 'alice')}"}
BOB = {"Authorization": f"Bearer {create_access_token('user-bob', 'bob')}"}
ADMIN = {"Authorization": f"Bearer {create_access_token('user-admin', 'admin', True)}"}


@pytest.fixture
def wired(bid_repo, lot_repo, archive_repo, notifier, locks, clock):
    consistency = ConsistencyService(bid_repo, lot_repo, locks, clock)
    ledger = BidLedgerService(bid_repo, lot_repo, notifier, consistency, locks, clock)
    lots = LotApplicationService(lot_repo, notifier, consistency, locks, clock)
    settlements = SettlementService(bid_repo, lot_repo, archive_repo, consistency, clock)

    async def _db():
        yield AsyncMock()

    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[get_consistency_service] = lambda: consistency
    app.dependency_overrides[get_bid_ledger_service] = lambda: ledger
    app.dependency_overrides[get_lot_service] = lambda: lots
    app.dependency_overrides[get_settlement_service] = lambda: settlements
    yield
    app.dependency_overrides.clear()


class TestBidRoutes:
    @pytest.mark.asyncio
    async def test_place_and_read_back(self, client, wired, lot_repo):
        lot_repo.add(make_lot(id="L1"))

        resp = await client.post("/api/v1/lots/L1/bids", json={"price": 110}, headers=ALICE)
        assert resp.status_code == 201
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["bidder_name"] == "alice"
        assert body["data"]["is_mine"] is True

        mine = (await client.get("/api/v1/lots/L1/bids", headers=ALICE)).json()["data"]
        theirs = (await client.get("/api/v1/lots/L1/bids", headers=BOB)).json()["data"]
        assert len(mine["bids"]) == 1
        assert theirs["bids"] == []
        assert theirs["total_bids_count"] == 1
        assert theirs["total_bid_amount"]["masked"] is True

    @pytest.mark.asyncio
    async def test_place_requires_token(self, client, wired, lot_repo):
        lot_repo.add(make_lot(id="L1"))
        resp = await client.post("/api/v1/lots/L1/bids", json={"price": 110})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_too_low_uses_error_envelope(self, client, wired, lot_repo):
        lot_repo.add(make_lot(id="L1", current_bid=200))

        resp = await client.post("/api/v1/lots/L1/bids", json={"price": 150}, headers=ALICE)

        assert resp.status_code == 422
        assert resp.json()["code"] == 3002
        assert resp.json()["data"] is None

    @pytest.mark.asyncio
    async def test_too_low_does_not_reveal_hidden_leader_price(self, client, wired, lot_repo):
        lot_repo.add(make_lot(id="L1", starting_price=100, current_bid=100))
        await client.post("/api/v1/lots/L1/bids", json={"price": 5370}, headers=ALICE)

        view = (await client.get("/api/v1/lots/L1", headers=BOB)).json()["data"]
        resp = await client.post("/api/v1/lots/L1/bids", json={"price": 110}, headers=BOB)

        assert view["current_bid"] == 100
        assert resp.json()["code"] == 3002
        assert "5370" not in resp.text

    @pytest.mark.asyncio
    async def test_remove_is_admin_only(self, client, wired, lot_repo, bid_repo):
        lot_repo.add(make_lot(id="L1", current_bid=110, leading_bidder_name="alice"))
        await bid_repo.insert_bid(None, make_bid(id="1", lot_id="L1", price=110))

        denied = await client.delete("/api/v1/bids/1", headers=ALICE)
        allowed = await client.delete("/api/v1/bids/1", headers=ADMIN)

        assert denied.status_code == 403
        assert denied.json()["code"] == 1002
        assert allowed.status_code == 200
        assert allowed.json()["data"] == {"bid_id": "1", "lot_id": "L1"}
        assert lot_repo.lots["L1"].current_bid == 100


class TestLotRoutes:
    @pytest.mark.asyncio
    async def test_admin_creates_lot(self, client, wired, lot_repo):
        resp = await client.post(
            "/api/v1/lots",
            json={"name": "Lamp", "starting_price": 100, "unit_quantity": 1},
            headers=ADMIN,
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["id"] in lot_repo.lots

    @pytest.mark.asyncio
    async def test_bidder_cannot_create_lot(self, client, wired):
        resp = await client.post(
            "/api/v1/lots", json={"name": "Lamp", "starting_price": 100}, headers=ALICE
        )
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_anonymous_listing(self, client, wired, lot_repo):
        lot_repo.add(make_lot(id="L1"))
        resp = await client.get("/api/v1/lots")
        assert resp.status_code == 200
        assert [i["id"] for i in resp.json()["data"]["items"]] == ["L1"]

    @pytest.mark.asyncio
    async def test_unknown_lot_404(self, client, wired):
        resp = await client.get("/api/v1/lots/nope")
        assert resp.status_code == 404
        assert resp.json()["code"] == 2001


class TestSettlementRoutes:
    @pytest.mark.asyncio
    async def test_winners_refused_before_close(self, client, wired, lot_repo):
        lot_repo.add(make_lot(id="L1"))
        resp = await client.get("/api/v1/lots/L1/winners")
        assert resp.status_code == 422
        assert resp.json()["code"] == 2003

    @pytest.mark.asyncio
    async def test_winners_after_close(self, client, wired, lot_repo, bid_repo):
        lot_repo.add(make_lot(id="L1", close_time=NOW - timedelta(minutes=1),
                              current_bid=110, leading_bidder_name="alice"))
        await bid_repo.insert_bid(None, make_bid(id="1", lot_id="L1", price=110))

        data = (await client.get("/api/v1/lots/L1/winners")).json()["data"]

        assert data["total_amount"] == 110
        assert data["awards"][0]["bidder_name"] == "alice"

    @pytest.mark.asyncio
    async def test_admin_sync_and_verify(self, client, wired, lot_repo, bid_repo):
        lot_repo.add(make_lot(id="L1", close_time=NOW - timedelta(minutes=1),
                              current_bid=130, leading_bidder_name="B"))
        await bid_repo.insert_bid(None, make_bid(id="1", lot_id="L1", price=130,
                                                 bidder_name="C"))

        check = await client.get("/api/v1/admin/lots/L1/consistency", headers=ADMIN)
        sync = await client.post("/api/v1/admin/lots/L1/sync", headers=ADMIN)
        verify = await client.post("/api/v1/admin/verify", headers=ADMIN)

        assert check.json()["data"]["inconsistent"] is True
        assert sync.json()["data"]["changed"] is True
        assert sync.json()["data"]["leading_bidder_name"] == "C"
        assert verify.json()["data"]["ok"] is True

    @pytest.mark.asyncio
    async def test_admin_routes_reject_bidders(self, client, wired):
        resp = await client.post("/api/v1/admin/archive", headers=BOB)
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_summary_anonymous(self, client, wired):
        resp = await client.get("/api/v1/auction/summary")
        assert resp.status_code == 200
        assert resp.json()["data"]["my_bids"] == []


@pytest.mark.asyncio
async def test_server_time(client) -> None:
    resp = await client.get("/time")
    assert resp.status_code == 200
    assert "server_time" in resp.json()["data"]


@pytest.mark.asyncio
async def test_request_id_echoed(client) -> None:
    resp = await client.get("/time")
    assert resp.headers["X-Request-ID"] == resp.json()["request_id"]
