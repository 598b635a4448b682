from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from clubhouse.database import Base
from datetime import datetime

AWARD = "award"
TRAINING = "training"
STREAK_BONUS = "streak_bonus"
MOTM = "motm"
UPGRADE = "upgrade"
CARD_UNLOCK = "card_unlock"


class PointTransaction(Base):
    """Append-only ledger row. Never updated or deleted by the application."""

    __tablename__ = "point_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False)
    match_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    player = relationship("Player")

    __table_args__ = (
        UniqueConstraint("player_id", "type", "match_id", name="uix_tx_player_type_match"),
    )
