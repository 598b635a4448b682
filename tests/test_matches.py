import datetime

from clubhouse.models.highlight import Highlight
from clubhouse.models.match import Match, MatchEvent
from clubhouse.models.point_transaction import PointTransaction
from clubhouse.services import match_service
from clubhouse.services.settings_service import update_settings

from conftest import make_player, make_team


def make_match(db, home, away, days=0, **fields):
    match = Match(
        date=datetime.datetime(2026, 3, 1, 19, 0) + datetime.timedelta(days=days),
        venue="JBL Field 3",
        home_team_id=home.id,
        away_team_id=away.id,
        **fields,
    )
    db.add(match)
    db.commit()
    return match


def motm_txs(db):
    return db.query(PointTransaction).filter(PointTransaction.type == "motm").all()


def test_motm_is_paid_once_per_match(admin_client, db):
    home, away = make_team(db, "Chiefs FC"), make_team(db, "AVL FC")
    star = make_player(db, "Star")
    match = make_match(db, home, away)
    events = [
        {"type": "goal", "player_id": star.id, "minute": 12},
        {"type": "motm", "player_id": star.id},
    ]

    for _ in range(2):
        resp = admin_client.patch("/api/matches", json={
            "id": match.id, "home_score": 2, "away_score": 0, "events": events,
        })
        assert resp.status_code == 200

    txs = motm_txs(db)
    assert len(txs) == 1
    assert txs[0].amount == 15
    assert txs[0].match_id == match.id
    assert txs[0].description == f"Man of the Match: Match #{match.id}"
    db.expire_all()
    assert star.point_balance == 15

    body = resp.json()
    assert [e["type"] for e in body["events"]] == ["goal", "motm"]
    assert body["completed"] is True


def test_motm_changing_player_does_not_pay_again(db):
    home, away = make_team(db, "H"), make_team(db, "A")
    first, second = make_player(db, "First"), make_player(db, "Second")
    match = make_match(db, home, away)

    match_service.update(db, match.id, events=[{"type": "motm", "player_id": first.id}])
    match_service.update(db, match.id, events=[{"type": "motm", "player_id": second.id}])

    assert [t.player_id for t in motm_txs(db)] == [first.id]
    assert db.query(MatchEvent).filter(MatchEvent.type == "motm").one().player_id == second.id


def test_motm_paid_for_match_created_after_a_delete(db):
    home, away = make_team(db, "H"), make_team(db, "A")
    first, second = make_player(db, "First"), make_player(db, "Second")
    old = make_match(db, home, away)
    old_id = old.id
    match_service.update(db, old.id, events=[{"type": "motm", "player_id": first.id}])
    match_service.delete(db, old_id)

    new = make_match(db, home, away, days=7)
    match_service.update(db, new.id, events=[{"type": "motm", "player_id": second.id}])

    assert new.id != old_id
    assert sorted(t.match_id for t in motm_txs(db)) == [old_id, new.id]
    db.expire_all()
    assert second.point_balance == 15


def test_update_match_rejects_missing_team(admin_client, db):
    home, away = make_team(db, "H"), make_team(db, "A")
    match = make_match(db, home, away)

    resp = admin_client.patch("/api/matches", json={"id": match.id, "home_team_id": None})

    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"


def test_motm_needs_exactly_one_event(db):
    home, away = make_team(db, "H"), make_team(db, "A")
    a, b = make_player(db, "A"), make_player(db, "B")
    match = make_match(db, home, away)

    match_service.update(db, match.id, events=[
        {"type": "motm", "player_id": a.id},
        {"type": "motm", "player_id": b.id},
    ])

    assert motm_txs(db) == []


def test_motm_disabled_with_zero_points(db):
    update_settings(db, motm_points=0)
    home, away = make_team(db, "H"), make_team(db, "A")
    star = make_player(db, "Star")
    match = make_match(db, home, away)

    match_service.update(db, match.id, events=[{"type": "motm", "player_id": star.id}])

    assert motm_txs(db) == []
    assert star.point_balance == 0


def test_match_filters(db):
    home, away = make_team(db, "H"), make_team(db, "A")
    now = datetime.datetime(2026, 3, 10, 12, 0)
    played = make_match(db, home, away, days=0, home_score=1, away_score=0)
    unscored = make_match(db, home, away, days=2)
    future = make_match(db, home, away, days=20)
    later_played = make_match(db, home, away, days=5, home_score=2, away_score=2)

    upcoming = match_service.get_matches(db, "upcoming", now=now)
    past = match_service.get_matches(db, "past", now=now)
    everything = match_service.get_matches(db, "all", now=now)

    assert [m.id for m in upcoming] == [unscored.id, future.id]
    assert [m.id for m in past] == [later_played.id, played.id]
    assert [m.id for m in everything] == [played.id, unscored.id, later_played.id, future.id]


def test_create_match_api(admin_client, db):
    home, away = make_team(db, "Chiefs FC"), make_team(db, "AVL FC")

    resp = admin_client.post("/api/matches", json={
        "date": "2026-02-15T19:00:00",
        "venue": "JBL Field 3, 498 Azalea Rd E, Asheville, NC 28805",
        "home_team_id": home.id,
        "away_team_id": away.id,
    })

    assert resp.status_code == 201
    body = resp.json()
    assert body["home_team"]["name"] == "Chiefs FC"
    assert body["home_score"] is None
    assert body["completed"] is False


def test_create_match_rejects_bad_input(admin_client, db):
    home = make_team(db, "Chiefs FC")
    base = {"date": "2026-02-15T19:00:00", "venue": "JBL", "home_team_id": home.id}

    assert admin_client.post("/api/matches", json={**base, "away_team_id": home.id}).status_code == 400
    assert admin_client.post("/api/matches", json={**base, "away_team_id": 999}).status_code == 404
    assert admin_client.post("/api/matches", json={**base, "away_team_id": home.id + 1, "venue": " "}).status_code == 400
    assert admin_client.post("/api/matches", json=base).status_code == 400


def test_cancel_and_delete_match(admin_client, db):
    home, away = make_team(db, "H"), make_team(db, "A")
    match = make_match(db, home, away, home_score=3, away_score=0)
    db.add(Highlight(title="Goals", video_url="https://example.com/v", match_id=match.id))
    db.commit()

    resp = admin_client.patch("/api/matches", json={
        "id": match.id, "cancelled": True, "cancel_reason": "Waterlogged pitch",
    })
    assert resp.json()["cancelled"] is True
    standings = admin_client.get("/api/standings").json()["standings"]
    assert all(row["played"] == 0 for row in standings)

    assert admin_client.request("DELETE", "/api/matches", json={"id": match.id}).json() == {"success": True}
    db.expire_all()
    assert db.query(Match).count() == 0
    assert db.query(Highlight).one().match_id is None


def test_appearances_and_season_stats(admin_client, db):
    home, away = make_team(db, "H"), make_team(db, "A")
    a, b = make_player(db, "Alex"), make_player(db, "Blake")
    match = make_match(db, home, away)

    admin_client.patch("/api/matches", json={
        "id": match.id,
        "appearances": [a.id, b.id],
        "events": [
            {"type": "goal", "player_id": b.id},
            {"type": "goal", "player_id": b.id},
            {"type": "assist", "player_id": a.id},
            {"type": "yellow_card", "player_id": a.id},
        ],
    })
    # resubmitting the same appearances replaces rather than duplicates
    admin_client.patch("/api/matches", json={"id": match.id, "appearances": [a.id, b.id]})

    stats = admin_client.get("/api/stats/players").json()
    assert [s["name"] for s in stats] == ["Blake", "Alex"]
    assert (stats[0]["goals"], stats[0]["appearances"]) == (2, 1)
    assert (stats[1]["assists"], stats[1]["yellow_cards"]) == (1, 1)


def test_delete_team_removes_its_matches(admin_client, db):
    home, away, other = make_team(db, "H"), make_team(db, "A"), make_team(db, "O")
    make_match(db, home, away, home_score=1, away_score=0)
    make_match(db, other, away)

    resp = admin_client.request("DELETE", "/api/teams", json={"id": home.id})

    assert resp.status_code == 200
    db.expire_all()
    assert db.query(Match).count() == 1


def test_match_mutations_require_admin(client, db):
    assert client.patch("/api/matches", json={"id": 1, "home_score": 1}).status_code == 401
    assert client.request("DELETE", "/api/matches", json={"id": 1}).status_code == 401
