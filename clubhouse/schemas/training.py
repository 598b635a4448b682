from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, StrictInt


class TrainingCreateRequest(BaseModel):
    date: datetime
    location: str
    notes: Optional[str] = None


class TrainingUpdateRequest(BaseModel):
    id: StrictInt
    date: Optional[datetime] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class RsvpRequest(BaseModel):
    training_id: StrictInt
    status: str


class ConfirmTrainingRequest(BaseModel):
    training_id: StrictInt
    attended_player_ids: List[StrictInt]
