from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from clubhouse.database import Base
from datetime import datetime


class Highlight(Base):
    __tablename__ = "highlights"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    video_url = Column(String, nullable=False)
    thumbnail = Column(String, nullable=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=True)
    pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    match = relationship("Match")
