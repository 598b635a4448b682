import re

from sqlalchemy.orm import Session

from clubhouse.models.match import MatchEvent, MatchAppearance
from clubhouse.models.player import Player, STAT_FIELDS, STAT_MAX
from clubhouse.models.point_transaction import PointTransaction
from clubhouse.models.training import TrainingRsvp
from clubhouse.services.exceptions import NotFoundError, ValidationError

PROFILE_FIELDS = ("name", "position", "number", "image_url")
PIN_PATTERN = re.compile(r"^\d{4}$")


def get_all(db: Session):
    return db.query(Player).order_by(Player.created_at, Player.id).all()


def get_by_id(db: Session, player_id: int) -> Player:
    player = db.get(Player, player_id)
    if not player:
        raise NotFoundError("Player not found")
    return player


def _check_stat(field: str, value) -> int:
    if not isinstance(value, int) or not 0 <= value <= STAT_MAX:
        raise ValidationError(f"{field} must be between 0 and {STAT_MAX}")
    return value


def create(db: Session, name: str, position: str, number: int | None = None,
           image_url: str | None = None, **stats) -> Player:
    name = (name or "").strip()
    position = (position or "").strip()
    if not name or not position:
        raise ValidationError("Name and position are required")

    player = Player(
        name=name,
        position=position,
        number=number or None,
        image_url=image_url or None,
        unlocked_card_types=[],
    )
    for field in STAT_FIELDS:
        value = stats.get(field)
        setattr(player, field, 50 if value is None else _check_stat(field, value))

    db.add(player)
    db.commit()
    db.refresh(player)
    return player


def update(db: Session, player_id: int, **changes) -> Player:
    """Edit profile and card attributes. Point totals are not editable here."""
    player = get_by_id(db, player_id)

    for field, value in changes.items():
        if field in STAT_FIELDS:
            setattr(player, field, _check_stat(field, value))
        elif field in PROFILE_FIELDS:
            if field in ("name", "position") and not (value or "").strip():
                raise ValidationError(f"{field} must not be empty")
            setattr(player, field, value.strip() if isinstance(value, str) else value)
        else:
            raise ValidationError(f"Field '{field}' cannot be changed")

    db.commit()
    db.refresh(player)
    return player


def delete(db: Session, player_id: int) -> None:
    player = get_by_id(db, player_id)
    db.query(MatchEvent).filter(MatchEvent.player_id == player.id).update(
        {MatchEvent.player_id: None}, synchronize_session="fetch"
    )
    for model in (MatchAppearance, TrainingRsvp, PointTransaction):
        db.query(model).filter(model.player_id == player.id).delete(synchronize_session="fetch")
    db.delete(player)
    db.commit()


def set_pin(db: Session, player_id: int, pin: str | None) -> Player:
    """Set a player's 4-digit login PIN, or clear it with an empty value."""
    if pin and not PIN_PATTERN.match(pin):
        raise ValidationError("PIN must be exactly 4 digits")
    player = get_by_id(db, player_id)
    player.pin = pin or None
    db.commit()
    db.refresh(player)
    return player


def leaderboard(db: Session) -> list[dict]:
    players = db.query(Player).order_by(Player.name).all()
    ranked = [
        {
            "id": p.id,
            "name": p.name,
            "position": p.position,
            "number": p.number,
            "image_url": p.image_url,
            "card_type": p.card_type,
            **{f: getattr(p, f) for f in STAT_FIELDS},
            "overall": p.overall,
        }
        for p in players
    ]
    # sort is stable, so equal overalls stay in name order
    ranked.sort(key=lambda x: x["overall"], reverse=True)
    return ranked


def season_stats(db: Session) -> list[dict]:
    players = db.query(Player).order_by(Player.name).all()

    appearances = {}
    for a in db.query(MatchAppearance).all():
        appearances[a.player_id] = appearances.get(a.player_id, 0) + 1

    events = {}
    for e in db.query(MatchEvent).filter(MatchEvent.player_id.isnot(None)).all():
        counts = events.setdefault(e.player_id, {})
        counts[e.type] = counts.get(e.type, 0) + 1

    stats = []
    for p in players:
        counts = events.get(p.id, {})
        stats.append({
            "id": p.id,
            "name": p.name,
            "position": p.position,
            "number": p.number,
            "image_url": p.image_url,
            "appearances": appearances.get(p.id, 0),
            "goals": counts.get("goal", 0),
            "assists": counts.get("assist", 0),
            "yellow_cards": counts.get("yellow_card", 0),
            "red_cards": counts.get("red_card", 0),
            "motm": counts.get("motm", 0),
        })

    stats.sort(key=lambda x: (x["goals"], x["appearances"]), reverse=True)
    return stats


def serialize_player(player: Player, include_pin: bool = False) -> dict:
    data = {
        "id": player.id,
        "name": player.name,
        "position": player.position,
        "number": player.number,
        "image_url": player.image_url,
        **{f: getattr(player, f) for f in STAT_FIELDS},
        "overall": player.overall,
        "card_type": player.card_type,
        "unlocked_card_types": list(player.unlocked_card_types or []),
        "point_balance": player.point_balance,
        "points_earned": player.points_earned,
        "points_spent": player.points_spent,
        "training_streak": player.training_streak,
        "has_pin": bool(player.pin),
        "created_at": player.created_at.isoformat() if player.created_at else None,
    }
    if include_pin:
        data["pin"] = player.pin
    return data
