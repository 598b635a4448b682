import logging

from sqlalchemy.orm import Session

from clubhouse.models.site_settings import SiteSettings, SETTINGS_ID
from clubhouse.services.exceptions import ValidationError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "team_photo_url",
    "player_cards_on",
    "card_types",
    "points_per_training",
    "upgrade_cost",
    "motm_points",
    "streak_bonus_3",
    "streak_bonus_5",
    "streak_bonus_10",
    "show_goal_scorers",
    "show_highlights",
    "show_player_stats",
    "show_motm",
    "show_streaks",
    "show_levels",
)

NON_NEGATIVE_FIELDS = (
    "points_per_training",
    "upgrade_cost",
    "streak_bonus_3",
    "streak_bonus_5",
    "streak_bonus_10",
)


def get_settings(db: Session) -> SiteSettings:
    """Return the settings row, creating it with defaults on first use."""
    settings = db.get(SiteSettings, SETTINGS_ID)
    if settings is None:
        settings = SiteSettings(id=SETTINGS_ID, card_types=[])
        db.add(settings)
        db.flush()
    return settings


def normalize_card_types(card_types) -> list[dict]:
    """Validate the card-type catalog and return it as a list of dicts."""
    if not isinstance(card_types, list):
        raise ValidationError("card_types must be a list")

    catalog = []
    seen = set()
    for entry in card_types:
        if not isinstance(entry, dict) or not entry.get("value") or not entry.get("label"):
            raise ValidationError("Each card type needs a value and a label")
        value = str(entry["value"])
        if value in seen:
            raise ValidationError(f"Duplicate card type '{value}'")
        seen.add(value)

        cost = entry.get("unlock_cost") or 0
        if not isinstance(cost, int) or cost < 0:
            raise ValidationError(f"Invalid unlock cost for card type '{value}'")

        catalog.append({
            "value": value,
            "label": str(entry["label"]),
            "image_url": entry.get("image_url"),
            "unlock_cost": cost,
            "unlockable": entry.get("unlockable", True) is not False,
        })
    return catalog


def update_settings(db: Session, **changes) -> SiteSettings:
    settings = get_settings(db)

    for field, value in changes.items():
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Unknown setting '{field}'")
        if value is None and field != "team_photo_url":
            raise ValidationError(f"{field} must not be null")
        if field in NON_NEGATIVE_FIELDS and value < 0:
            raise ValidationError(f"{field} must not be negative")
        if field == "card_types":
            value = normalize_card_types(value)
        setattr(settings, field, value)

    db.commit()
    db.refresh(settings)
    logger.info("Site settings updated: %s", ", ".join(sorted(changes)) or "no changes")
    return settings


def serialize_settings(settings: SiteSettings) -> dict:
    return {"id": settings.id, **{f: getattr(settings, f) for f in EDITABLE_FIELDS}}
