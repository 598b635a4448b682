from sqlalchemy import Column, String, Integer, DateTime, JSON
from clubhouse.database import Base
from datetime import datetime

STAT_MAX = 99
STAT_FIELDS = ("pace", "shooting", "passing", "dribbling", "defending", "physical")
DEFAULT_CARD_TYPE = "default"


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    position = Column(String, nullable=False)
    number = Column(Integer, nullable=True)
    image_url = Column(String, nullable=True)

    # Card attributes, 0-99
    pace = Column(Integer, nullable=False, default=50)
    shooting = Column(Integer, nullable=False, default=50)
    passing = Column(Integer, nullable=False, default=50)
    dribbling = Column(Integer, nullable=False, default=50)
    defending = Column(Integer, nullable=False, default=50)
    physical = Column(Integer, nullable=False, default=50)

    card_type = Column(String, nullable=False, default=DEFAULT_CARD_TYPE)
    unlocked_card_types = Column(JSON, nullable=False, default=list)

    # Cached totals; the point_transactions table is the ledger
    point_balance = Column(Integer, nullable=False, default=0)
    points_earned = Column(Integer, nullable=False, default=0)
    points_spent = Column(Integer, nullable=False, default=0)

    training_streak = Column(Integer, nullable=False, default=0)

    pin = Column(String(4), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @property
    def overall(self) -> int:
        return round(sum(getattr(self, f) for f in STAT_FIELDS) / len(STAT_FIELDS))
