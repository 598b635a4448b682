import logging

from sqlalchemy.orm import Session

from clubhouse.models.player import Player, STAT_FIELDS, STAT_MAX, DEFAULT_CARD_TYPE
from clubhouse.models.point_transaction import UPGRADE, CARD_UNLOCK
from clubhouse.services.exceptions import (
    AlreadyUnlockedError,
    BusinessRuleError,
    NotFoundError,
    StatAtMaxError,
    ValidationError,
)
from clubhouse.services.points_service import debit, lock_player
from clubhouse.services.settings_service import get_settings

logger = logging.getLogger(__name__)

LEVELS = (
    (500, "Legend"),
    (300, "Veteran"),
    (150, "Regular"),
    (50, "Starter"),
    (0, "Rookie"),
)


def level_for(points_earned: int) -> str:
    for minimum, label in LEVELS:
        if points_earned >= minimum:
            return label
    return "Rookie"


def upgrade_stat(db: Session, player_id: int, stat: str) -> Player:
    """Raise one card attribute by a single point, paid for with points."""
    if stat not in STAT_FIELDS:
        raise ValidationError("Invalid stat")

    player = lock_player(db, player_id)
    settings = get_settings(db)

    current = getattr(player, stat)
    if current >= STAT_MAX:
        raise StatAtMaxError()

    debit(db, player, settings.upgrade_cost, UPGRADE, f"Upgraded {stat.upper()} to {current + 1}")
    setattr(player, stat, current + 1)

    db.commit()
    db.refresh(player)
    return player


def _find_card_type(settings, card_type: str) -> dict | None:
    return next((ct for ct in settings.card_types or [] if ct.get("value") == card_type), None)


def unlock_card(db: Session, player_id: int, card_type: str) -> Player:
    if not card_type:
        raise ValidationError("Card type required")

    player = lock_player(db, player_id)
    settings = get_settings(db)

    target = _find_card_type(settings, card_type)
    if target is None:
        raise NotFoundError("Card type not found")
    if target.get("unlockable") is False:
        raise BusinessRuleError("Card type cannot be unlocked")

    unlocked = list(player.unlocked_card_types or [])
    if card_type in unlocked:
        raise AlreadyUnlockedError("Already unlocked")

    cost = target.get("unlock_cost") or 0
    debit(db, player, cost, CARD_UNLOCK, f"Unlocked {target.get('label', card_type)} card")

    # assign a new list so the JSON column sees the change
    player.unlocked_card_types = unlocked + [card_type]
    player.card_type = card_type

    db.commit()
    db.refresh(player)
    return player


def switch_card(db: Session, player_id: int, card_type: str) -> Player:
    if not card_type:
        raise ValidationError("Card type required")

    player = lock_player(db, player_id)
    if card_type != DEFAULT_CARD_TYPE and card_type not in (player.unlocked_card_types or []):
        raise BusinessRuleError("Card type not unlocked")

    player.card_type = card_type
    db.commit()
    db.refresh(player)
    return player


def card_catalog_for(player: Player, settings) -> list[dict]:
    """Card types a player can pick from, with their unlock status."""
    unlocked = set(player.unlocked_card_types or [])
    catalog = [{
        "value": DEFAULT_CARD_TYPE,
        "label": "Default",
        "image_url": None,
        "unlock_cost": 0,
        "unlockable": True,
        "unlocked": True,
    }]
    for ct in settings.card_types or []:
        if ct.get("unlockable") is False:
            continue
        catalog.append({
            **ct,
            "unlock_cost": ct.get("unlock_cost") or 0,
            "unlockable": True,
            "unlocked": ct["value"] in unlocked,
        })
    return catalog
