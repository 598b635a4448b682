from sqlalchemy import Column, String, Integer, Boolean, JSON
from clubhouse.database import Base

SETTINGS_ID = 1


class SiteSettings(Base):
    """Singleton row (id 1) with the club's configurable constants."""

    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ID)
    team_photo_url = Column(String, nullable=True)
    player_cards_on = Column(Boolean, nullable=False, default=True)
    # [{"value": ..., "label": ..., "image_url": ..., "unlock_cost": ..., "unlockable": ...}]
    card_types = Column(JSON, nullable=False, default=list)

    points_per_training = Column(Integer, nullable=False, default=10)
    upgrade_cost = Column(Integer, nullable=False, default=10)
    motm_points = Column(Integer, nullable=False, default=15)
    streak_bonus_3 = Column(Integer, nullable=False, default=5)
    streak_bonus_5 = Column(Integer, nullable=False, default=10)
    streak_bonus_10 = Column(Integer, nullable=False, default=25)

    show_goal_scorers = Column(Boolean, nullable=False, default=True)
    show_highlights = Column(Boolean, nullable=False, default=True)
    show_player_stats = Column(Boolean, nullable=False, default=True)
    show_motm = Column(Boolean, nullable=False, default=True)
    show_streaks = Column(Boolean, nullable=False, default=True)
    show_levels = Column(Boolean, nullable=False, default=True)
