import pytest

from clubhouse.models.point_transaction import PointTransaction
from clubhouse.services.exceptions import InsufficientPointsError, NotFoundError, ValidationError
from clubhouse.services.points_service import (
    audit_ledger,
    award_points,
    credit,
    debit,
    ledger_balance,
)

from conftest import make_player


def test_credit_and_debit_keep_ledger_in_step(db):
    player = make_player(db, "Sam")

    credit(db, player, 30, "training", "Training attendance: Main pitch")
    debit(db, player, 12, "upgrade", "Upgraded PACE to 51")
    db.commit()

    assert player.point_balance == 18
    assert player.points_earned == 30
    assert player.points_spent == 12
    assert ledger_balance(db, player.id) == 18
    assert audit_ledger(db) == []


def test_debit_rejects_overdraft_without_changes(db):
    player = make_player(db, "Sam", points=5)

    with pytest.raises(InsufficientPointsError):
        debit(db, player, 10, "upgrade", "Upgraded PACE to 51")
    db.rollback()

    assert player.point_balance == 5
    assert player.points_spent == 0
    assert db.query(PointTransaction).count() == 1


def test_award_points_to_several_players(db):
    a = make_player(db, "A")
    b = make_player(db, "B")

    count = award_points(db, [a.id, b.id, a.id], 25, "Tournament win")

    assert count == 2
    assert (a.point_balance, a.points_earned) == (25, 25)
    assert (b.point_balance, b.points_earned) == (25, 25)
    txs = db.query(PointTransaction).filter(PointTransaction.type == "award").all()
    assert len(txs) == 2
    assert {t.description for t in txs} == {"Tournament win"}


def test_negative_award_reduces_balance_only(db):
    player = make_player(db, "A", points=20)

    award_points(db, [player.id], -5, "Late for kickoff")

    assert player.point_balance == 15
    assert player.points_earned == 20
    assert ledger_balance(db, player.id) == 15


def test_negative_award_is_all_or_nothing(db):
    rich = make_player(db, "Rich", points=50)
    poor = make_player(db, "Poor", points=2)

    with pytest.raises(InsufficientPointsError):
        award_points(db, [rich.id, poor.id], -10, "Fine")
    db.rollback()

    assert rich.point_balance == 50
    assert poor.point_balance == 2


@pytest.mark.parametrize("player_ids,amount,description", [
    ([], 10, "x"),
    ([1], 0, "x"),
    ([1], 10, "  "),
])
def test_award_points_validation(db, player_ids, amount, description):
    make_player(db, "A")
    with pytest.raises(ValidationError):
        award_points(db, player_ids, amount, description)


def test_award_points_unknown_player(db):
    player = make_player(db, "A")
    with pytest.raises(NotFoundError):
        award_points(db, [player.id, 999], 10, "Bonus")
    db.rollback()
    assert player.point_balance == 0


def test_audit_reports_cached_balance_drift(db):
    player = make_player(db, "Drifty", points=10)
    player.point_balance = 40
    db.commit()

    mismatches = audit_ledger(db)

    assert mismatches == [{
        "player_id": player.id,
        "name": "Drifty",
        "point_balance": 40,
        "ledger_balance": 10,
    }]


def test_admin_points_api(admin_client, db):
    player = make_player(db, "Sam")

    resp = admin_client.post("/api/admin/points", json={
        "player_ids": [player.id], "amount": 15, "description": "Clean sheet",
    })
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "players_awarded": 1}

    listing = admin_client.get("/api/admin/points").json()
    assert listing[0]["point_balance"] == 15
    assert listing[0]["transactions"][0]["description"] == "Clean sheet"

    audit = admin_client.get("/api/admin/points/audit").json()
    assert audit == {"consistent": True, "mismatches": []}


def test_points_api_requires_admin(client):
    resp = client.post("/api/admin/points", json={"player_ids": [1], "amount": 5, "description": "x"})
    assert resp.status_code == 401
    assert resp.json()["kind"] == "unauthorized"
