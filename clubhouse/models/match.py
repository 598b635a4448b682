from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from clubhouse.database import Base


class Match(Base):
    __tablename__ = "matches"
    # ledger rows reference match ids after the match is gone, so ids are never reused
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False)
    venue = Column(String, nullable=False)

    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)

    # None until the match has been played
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)

    cancelled = Column(Boolean, nullable=False, default=False)
    cancel_reason = Column(String, nullable=True)

    home_team = relationship("Team", foreign_keys=[home_team_id], back_populates="home_matches")
    away_team = relationship("Team", foreign_keys=[away_team_id], back_populates="away_matches")
    events = relationship("MatchEvent", back_populates="match", cascade="all, delete-orphan")
    appearances = relationship("MatchAppearance", back_populates="match", cascade="all, delete-orphan")

    @property
    def completed(self) -> bool:
        return self.home_score is not None and self.away_score is not None


class MatchEvent(Base):
    __tablename__ = "match_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=True)
    type = Column(String, nullable=False)  # goal, assist, yellow_card, red_card, motm
    minute = Column(Integer, nullable=True)
    notes = Column(String, nullable=True)

    match = relationship("Match", back_populates="events")
    player = relationship("Player")


class MatchAppearance(Base):
    __tablename__ = "match_appearances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)

    match = relationship("Match", back_populates="appearances")
    player = relationship("Player")

    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uix_appearance_match_player"),
    )
