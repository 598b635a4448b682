from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, StrictInt


class MatchEventIn(BaseModel):
    type: str
    player_id: Optional[StrictInt] = None
    minute: Optional[StrictInt] = None
    notes: Optional[str] = None


class MatchCreateRequest(BaseModel):
    date: datetime
    venue: str
    home_team_id: StrictInt
    away_team_id: StrictInt
    home_score: Optional[StrictInt] = None
    away_score: Optional[StrictInt] = None


class MatchUpdateRequest(BaseModel):
    id: StrictInt
    date: Optional[datetime] = None
    venue: Optional[str] = None
    home_team_id: Optional[StrictInt] = None
    away_team_id: Optional[StrictInt] = None
    home_score: Optional[StrictInt] = None
    away_score: Optional[StrictInt] = None
    cancelled: Optional[bool] = None
    cancel_reason: Optional[str] = None
    events: Optional[List[MatchEventIn]] = None
    appearances: Optional[List[StrictInt]] = None
