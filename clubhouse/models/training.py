from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from clubhouse.database import Base

RSVP_IN = "in"
RSVP_OUT = "out"


class Training(Base):
    __tablename__ = "trainings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False)
    location = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    # open -> completed, never back
    completed = Column(Boolean, nullable=False, default=False)

    rsvps = relationship("TrainingRsvp", back_populates="training", cascade="all, delete-orphan")


class TrainingRsvp(Base):
    __tablename__ = "training_rsvps"

    id = Column(Integer, primary_key=True, autoincrement=True)
    training_id = Column(Integer, ForeignKey("trainings.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    status = Column(String, nullable=False, default=RSVP_IN)
    attended = Column(Boolean, nullable=False, default=False)

    training = relationship("Training", back_populates="rsvps")
    player = relationship("Player")

    __table_args__ = (
        UniqueConstraint("training_id", "player_id", name="uix_rsvp_training_player"),
    )
