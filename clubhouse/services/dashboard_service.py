from sqlalchemy.orm import Session

from clubhouse.models.match import MatchEvent
from clubhouse.models.point_transaction import MOTM
from clubhouse.services.player_service import get_by_id, serialize_player
from clubhouse.services.points_service import recent_transactions, serialize_transaction
from clubhouse.services.progression_service import card_catalog_for, level_for
from clubhouse.services.settings_service import get_settings


def player_dashboard(db: Session, player_id: int) -> dict:
    player = get_by_id(db, player_id)
    settings = get_settings(db)

    motm_count = (
        db.query(MatchEvent)
        .filter(MatchEvent.player_id == player.id, MatchEvent.type == MOTM)
        .count()
    )

    return {
        "player": serialize_player(player),
        "transactions": [serialize_transaction(t) for t in recent_transactions(db, player.id, 20)],
        "upgrade_cost": settings.upgrade_cost,
        "card_types": card_catalog_for(player, settings),
        "motm_count": motm_count,
        "streak": player.training_streak,
        "level": level_for(player.points_earned),
        "settings": {
            "show_motm": settings.show_motm,
            "show_streaks": settings.show_streaks,
            "show_levels": settings.show_levels,
            "points_per_training": settings.points_per_training,
        },
    }
