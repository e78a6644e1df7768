"""Tests for auc_bid.domain.leader — the shared priority ordering."""

from datetime import timedelta

from src.auc_bid.domain.leader import expected_leader, rank_bids, select_leader
from src.auc_bid.domain.models import Leader
from tests.unit.factories import NOW, make_bid


class TestRankBids:
    def test_price_descending(self) -> None:
        bids = [make_bid(id="1", price=110), make_bid(id="2", price=130)]
        assert [b.id for b in rank_bids(bids)] == ["2", "1"]

    def test_tie_goes_to_earlier_bid(self) -> None:
        early = make_bid(id="2", price=130, created_at=NOW - timedelta(minutes=5))
        late = make_bid(id="1", price=130, created_at=NOW)
        assert rank_bids([late, early])[0] is early

    def test_same_instant_uses_numeric_id(self) -> None:
        a = make_bid(id="10", price=130, created_at=NOW)
        b = make_bid(id="9", price=130, created_at=NOW)
        assert [x.id for x in rank_bids([a, b])] == ["9", "10"]


class TestExpectedLeader:
    def test_empty_ledger_falls_back_to_starting_price(self) -> None:
        assert expected_leader([], 100) == Leader(current_bid=100, leading_bidder_name=None)

    def test_top_bid_wins(self) -> None:
        bids = [
            make_bid(id="1", price=110, bidder_name="A"),
            make_bid(id="2", price=130, bidder_name="B", created_at=NOW - timedelta(minutes=2)),
            make_bid(id="3", price=130, bidder_name="C", created_at=NOW - timedelta(minutes=1)),
        ]
        assert expected_leader(bids, 100) == Leader(130, "B")

    def test_select_leader_none_when_empty(self) -> None:
        assert select_leader([]) is None
