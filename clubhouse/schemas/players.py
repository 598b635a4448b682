from typing import Optional

from pydantic import BaseModel, StrictInt


class PlayerCreateRequest(BaseModel):
    name: str
    position: str
    number: Optional[StrictInt] = None
    image_url: Optional[str] = None
    pace: Optional[StrictInt] = None
    shooting: Optional[StrictInt] = None
    passing: Optional[StrictInt] = None
    dribbling: Optional[StrictInt] = None
    defending: Optional[StrictInt] = None
    physical: Optional[StrictInt] = None


class PlayerUpdateRequest(BaseModel):
    id: StrictInt
    name: Optional[str] = None
    position: Optional[str] = None
    number: Optional[StrictInt] = None
    image_url: Optional[str] = None
    pace: Optional[StrictInt] = None
    shooting: Optional[StrictInt] = None
    passing: Optional[StrictInt] = None
    dribbling: Optional[StrictInt] = None
    defending: Optional[StrictInt] = None
    physical: Optional[StrictInt] = None


class PinRequest(BaseModel):
    player_id: StrictInt
    pin: Optional[str] = None


class UpgradeRequest(BaseModel):
    stat: str


class CardRequest(BaseModel):
    card_type: str
