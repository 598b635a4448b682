import logging
from datetime import datetime

from sqlalchemy.orm import Session

from clubhouse.models.player import Player
from clubhouse.models.point_transaction import TRAINING, STREAK_BONUS
from clubhouse.models.training import Training, TrainingRsvp, RSVP_IN, RSVP_OUT
from clubhouse.services.exceptions import (
    AlreadyConfirmedError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from clubhouse.services.points_service import credit, lock_player
from clubhouse.services.settings_service import get_settings

logger = logging.getLogger(__name__)

STREAK_THRESHOLDS = (3, 5, 10)


def get_by_id(db: Session, training_id: int) -> Training:
    training = db.get(Training, training_id)
    if not training:
        raise NotFoundError("Training not found")
    return training


def get_all(db: Session):
    return db.query(Training).order_by(Training.date).all()


def create(db: Session, date: datetime, location: str, notes: str | None = None) -> Training:
    location = (location or "").strip()
    if not date or not location:
        raise ValidationError("Date and location required")
    training = Training(date=date, location=location, notes=notes or None)
    db.add(training)
    db.commit()
    db.refresh(training)
    return training


def update(db: Session, training_id: int, **changes) -> Training:
    training = get_by_id(db, training_id)
    if "date" in changes and changes["date"] is not None:
        training.date = changes["date"]
    if "location" in changes:
        location = (changes["location"] or "").strip()
        if not location:
            raise ValidationError("Location must not be empty")
        training.location = location
    if "notes" in changes:
        training.notes = changes["notes"] or None
    db.commit()
    db.refresh(training)
    return training


def delete(db: Session, training_id: int) -> None:
    training = get_by_id(db, training_id)
    db.delete(training)
    db.commit()


def set_rsvp(db: Session, training_id: int, player_id: int, status: str) -> TrainingRsvp:
    if status not in (RSVP_IN, RSVP_OUT):
        raise ValidationError("status must be 'in' or 'out'")
    training = get_by_id(db, training_id)
    if training.completed:
        raise ConflictError("Training already completed")
    if not db.get(Player, player_id):
        raise NotFoundError("Player not found")

    rsvp = (
        db.query(TrainingRsvp)
        .filter(TrainingRsvp.training_id == training_id, TrainingRsvp.player_id == player_id)
        .first()
    )
    if rsvp:
        rsvp.status = status
    else:
        rsvp = TrainingRsvp(training_id=training_id, player_id=player_id, status=status)
        db.add(rsvp)
    db.commit()
    db.refresh(rsvp)
    return rsvp


def streak_bonus_for(settings, streak: int) -> int:
    """Bonus for reaching exactly one of the streak thresholds, else 0."""
    if streak not in STREAK_THRESHOLDS:
        return 0
    return getattr(settings, f"streak_bonus_{streak}") or 0


def confirm_training(db: Session, training_id: int, attended_player_ids: list[int]) -> dict:
    """Record attendance for a training, pay out points and close it.

    Runs as one transaction: either every attendee is credited and the
    training is marked completed, or nothing is written.
    """
    if not training_id or not isinstance(attended_player_ids, list):
        raise ValidationError("training_id and attended_player_ids required")

    training = (
        db.query(Training)
        .filter(Training.id == training_id)
        .with_for_update()
        .first()
    )
    if not training:
        raise NotFoundError("Training not found")
    if training.completed:
        raise AlreadyConfirmedError("Training already confirmed")

    settings = get_settings(db)
    points = settings.points_per_training or 0

    # Every attendee must exist before anything is written
    attendees = [lock_player(db, pid) for pid in dict.fromkeys(attended_player_ids)]

    rsvps = {r.player_id: r for r in training.rsvps}
    for rsvp in rsvps.values():
        rsvp.attended = False

    for player in attendees:
        rsvp = rsvps.get(player.id)
        if rsvp is None:
            rsvp = TrainingRsvp(player_id=player.id, status=RSVP_IN)
            training.rsvps.append(rsvp)
        rsvp.attended = True

        if points > 0:
            credit(db, player, points, TRAINING, f"Training attendance: {training.location}")

    previous = {p.id: p.training_streak for p in attendees}
    training.completed = True
    db.flush()

    # Runs follow training dates, so a late confirmation of an older
    # training can shorten other players' streaks too
    streaks = current_streaks(db)
    for player in db.query(Player).all():
        player.training_streak = streaks.get(player.id, 0)

    bonuses = []
    for player in attendees:
        streak = player.training_streak
        if not settings.show_streaks or streak <= previous[player.id]:
            continue
        bonus = streak_bonus_for(settings, streak)
        if bonus > 0:
            credit(db, player, bonus, STREAK_BONUS, f"{streak}-training streak bonus")
            bonuses.append({"player_id": player.id, "streak": streak, "bonus": bonus})

    db.commit()

    logger.info(
        "Training %s confirmed: %d attendee(s), %d streak bonus(es)",
        training.id, len(attendees), len(bonuses),
    )
    return {
        "success": True,
        "points_awarded": points,
        "players_awarded": len(attendees),
        "streak_bonuses": bonuses,
    }


def _completed_trainings(db: Session) -> list[int]:
    rows = (
        db.query(Training.id)
        .filter(Training.completed.is_(True))
        .order_by(Training.date.desc(), Training.id.desc())
        .all()
    )
    return [row.id for row in rows]


def _run_length(training_ids: list[int], attended: set) -> int:
    streak = 0
    for training_id in training_ids:
        if training_id not in attended:
            break
        streak += 1
    return streak


def streak_from_history(db: Session, player_id: int) -> int:
    """Count consecutive attended trainings, most recent first."""
    attended = {
        r.training_id
        for r in db.query(TrainingRsvp).filter(
            TrainingRsvp.player_id == player_id,
            TrainingRsvp.attended.is_(True),
        )
    }
    return _run_length(_completed_trainings(db), attended)


def current_streaks(db: Session) -> dict[int, int]:
    """Streak of every player with at least one attended training."""
    attended = {}
    for rsvp in db.query(TrainingRsvp).filter(TrainingRsvp.attended.is_(True)):
        attended.setdefault(rsvp.player_id, set()).add(rsvp.training_id)
    training_ids = _completed_trainings(db)
    return {pid: _run_length(training_ids, done) for pid, done in attended.items()}


def serialize_rsvp(rsvp: TrainingRsvp) -> dict:
    data = {
        "id": rsvp.id,
        "training_id": rsvp.training_id,
        "player_id": rsvp.player_id,
        "status": rsvp.status,
        "attended": rsvp.attended,
    }
    if rsvp.player is not None:
        data["player"] = {"id": rsvp.player.id, "name": rsvp.player.name}
    return data


def serialize_training(training: Training, with_rsvps: bool = False) -> dict:
    data = {
        "id": training.id,
        "date": training.date.isoformat(),
        "location": training.location,
        "notes": training.notes,
        "completed": training.completed,
    }
    if with_rsvps:
        data["rsvps"] = [serialize_rsvp(r) for r in training.rsvps]
    return data


def trainings_for_admin(db: Session) -> list[dict]:
    return [serialize_training(t, with_rsvps=True) for t in get_all(db)]


def trainings_for_player(db: Session, player_id: int) -> list[dict]:
    result = []
    for t in get_all(db):
        mine = next((r for r in t.rsvps if r.player_id == player_id), None)
        data = serialize_training(t)
        data.update({
            "my_rsvp_status": mine.status if mine else "none",
            "my_attended": bool(mine and mine.attended),
            "rsvp_summary": {
                "in_count": sum(1 for r in t.rsvps if r.status == RSVP_IN),
                "out_count": sum(1 for r in t.rsvps if r.status == RSVP_OUT),
            },
        })
        result.append(data)
    return result
