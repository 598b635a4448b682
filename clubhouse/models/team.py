from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from clubhouse.database import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)

    # Results entered by hand, outside of recorded matches
    manual_won = Column(Integer, nullable=False, default=0)
    manual_drawn = Column(Integer, nullable=False, default=0)
    manual_lost = Column(Integer, nullable=False, default=0)
    manual_gf = Column(Integer, nullable=False, default=0)
    manual_ga = Column(Integer, nullable=False, default=0)

    home_matches = relationship("Match", foreign_keys="Match.home_team_id", back_populates="home_team")
    away_matches = relationship("Match", foreign_keys="Match.away_team_id", back_populates="away_team")

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}')>"
