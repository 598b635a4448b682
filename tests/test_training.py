import pytest

from clubhouse.models.point_transaction import PointTransaction
from clubhouse.models.training import Training, TrainingRsvp
from clubhouse.services.exceptions import AlreadyConfirmedError, ConflictError, NotFoundError
from clubhouse.services.points_service import audit_ledger
from clubhouse.services.settings_service import update_settings
from clubhouse.services.training_service import (
    confirm_training,
    set_rsvp,
    streak_bonus_for,
    streak_from_history,
)

from conftest import make_player, make_training


def bonus_txs(db, player):
    return (
        db.query(PointTransaction)
        .filter(PointTransaction.player_id == player.id, PointTransaction.type == "streak_bonus")
        .order_by(PointTransaction.id)
        .all()
    )


def test_confirm_awards_points_and_closes_training(db):
    player = make_player(db, "Seven")
    training = make_training(db)

    result = confirm_training(db, training.id, [player.id])

    assert result["success"] is True
    assert result["points_awarded"] == 10
    assert result["players_awarded"] == 1
    assert player.point_balance == 10
    assert player.points_earned == 10
    txs = db.query(PointTransaction).filter(PointTransaction.player_id == player.id).all()
    assert [(t.type, t.amount) for t in txs] == [("training", 10)]
    assert txs[0].description == "Training attendance: Main pitch"
    assert db.get(Training, training.id).completed is True


def test_second_confirmation_fails_without_paying(db):
    player = make_player(db, "Seven")
    training = make_training(db)
    confirm_training(db, training.id, [player.id])

    with pytest.raises(AlreadyConfirmedError):
        confirm_training(db, training.id, [player.id])
    db.rollback()

    assert player.point_balance == 10
    assert db.query(PointTransaction).count() == 1


def test_no_show_rsvps_are_marked_not_attended(db):
    came = make_player(db, "Came")
    skipped = make_player(db, "Skipped")
    walk_in = make_player(db, "Walk-in")
    training = make_training(db)
    set_rsvp(db, training.id, came.id, "in")
    set_rsvp(db, training.id, skipped.id, "in")

    confirm_training(db, training.id, [came.id, walk_in.id])

    rsvps = {r.player_id: r for r in db.query(TrainingRsvp).all()}
    assert rsvps[came.id].attended is True
    assert rsvps[skipped.id].attended is False
    assert rsvps[walk_in.id].attended is True
    assert rsvps[walk_in.id].status == "in"
    assert skipped.point_balance == 0


def test_unknown_player_rolls_back_whole_batch(db):
    player = make_player(db, "Real")
    training = make_training(db)

    with pytest.raises(NotFoundError):
        confirm_training(db, training.id, [player.id, 404])
    db.rollback()

    assert player.point_balance == 0
    assert db.get(Training, training.id).completed is False
    assert db.query(PointTransaction).count() == 0


def test_missing_training(db):
    with pytest.raises(NotFoundError):
        confirm_training(db, 123, [])


def test_duplicate_ids_pay_once(db):
    player = make_player(db, "Keen")
    training = make_training(db)

    result = confirm_training(db, training.id, [player.id, player.id])

    assert result["players_awarded"] == 1
    assert player.point_balance == 10


def test_streak_bonus_only_on_exact_thresholds(db):
    player = make_player(db, "Regular")
    trainings = [make_training(db, days_ago=20 - i) for i in range(11)]

    for training in trainings:
        confirm_training(db, training.id, [player.id])

    bonuses = bonus_txs(db, player)
    assert [t.amount for t in bonuses] == [5, 10, 25]
    assert [t.description for t in bonuses] == [
        "3-training streak bonus",
        "5-training streak bonus",
        "10-training streak bonus",
    ]
    assert player.training_streak == 11
    assert player.point_balance == 11 * 10 + 5 + 10 + 25
    assert audit_ledger(db) == []


def test_missed_training_resets_streak(db):
    player = make_player(db, "Patchy")
    other = make_player(db, "Other")
    trainings = [make_training(db, days_ago=10 - i) for i in range(5)]

    confirm_training(db, trainings[0].id, [player.id])
    confirm_training(db, trainings[1].id, [player.id])
    confirm_training(db, trainings[2].id, [other.id])
    assert player.training_streak == 0

    confirm_training(db, trainings[3].id, [player.id])
    confirm_training(db, trainings[4].id, [player.id])

    assert player.training_streak == 2
    assert streak_from_history(db, player.id) == 2
    assert bonus_txs(db, player) == []


def test_streak_bonus_disabled(db):
    update_settings(db, show_streaks=False)
    player = make_player(db, "Quiet")
    for training in [make_training(db, days_ago=5 - i) for i in range(3)]:
        confirm_training(db, training.id, [player.id])

    assert player.training_streak == 3
    assert bonus_txs(db, player) == []
    assert player.point_balance == 30


def test_streak_counter_matches_history(db):
    a = make_player(db, "A")
    b = make_player(db, "B")
    plan = [[a.id, b.id], [a.id], [a.id, b.id], [b.id], [a.id, b.id]]
    for i, attendees in enumerate(plan):
        confirm_training(db, make_training(db, days_ago=10 - i).id, attendees)

    for player in (a, b):
        assert player.training_streak == streak_from_history(db, player.id)
    assert (a.training_streak, b.training_streak) == (1, 3)


def test_confirming_an_older_training_keeps_newer_runs(db):
    player = make_player(db, "Steady")
    confirm_training(db, make_training(db, days_ago=3).id, [player.id])
    confirm_training(db, make_training(db, days_ago=2).id, [player.id])

    confirm_training(db, make_training(db, days_ago=30).id, [])

    assert player.training_streak == 2
    assert streak_from_history(db, player.id) == 2

    result = confirm_training(db, make_training(db, days_ago=1).id, [player.id])

    assert player.training_streak == 3
    assert result["streak_bonuses"] == [{"player_id": player.id, "streak": 3, "bonus": 5}]
    assert [t.amount for t in bonus_txs(db, player)] == [5]


def test_late_confirmation_inside_a_run(db):
    missed = make_player(db, "Missed")
    went = make_player(db, "Went")
    confirm_training(db, make_training(db, days_ago=5).id, [missed.id, went.id])
    confirm_training(db, make_training(db, days_ago=3).id, [missed.id, went.id])

    confirm_training(db, make_training(db, days_ago=4).id, [went.id])

    assert (missed.training_streak, went.training_streak) == (1, 3)
    for player in (missed, went):
        assert player.training_streak == streak_from_history(db, player.id)
    assert [t.amount for t in bonus_txs(db, went)] == [5]
    assert audit_ledger(db) == []


def test_streak_bonus_for_thresholds(db):
    settings = update_settings(db, streak_bonus_3=7)
    assert [streak_bonus_for(settings, n) for n in (2, 3, 4, 5, 6, 10, 11)] == [0, 7, 0, 10, 0, 25, 0]


def test_rsvp_locked_after_completion(db):
    player = make_player(db, "Late")
    training = make_training(db)
    confirm_training(db, training.id, [])

    with pytest.raises(ConflictError):
        set_rsvp(db, training.id, player.id, "in")


def test_rsvp_upsert(db):
    player = make_player(db, "Fickle")
    training = make_training(db)

    set_rsvp(db, training.id, player.id, "in")
    set_rsvp(db, training.id, player.id, "out")

    rsvps = db.query(TrainingRsvp).all()
    assert len(rsvps) == 1
    assert rsvps[0].status == "out"
