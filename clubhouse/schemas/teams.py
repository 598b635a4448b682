from typing import Optional

from pydantic import BaseModel, StrictInt


class TeamCreateRequest(BaseModel):
    name: str


class TeamUpdateRequest(BaseModel):
    id: StrictInt
    name: Optional[str] = None
    manual_won: Optional[StrictInt] = None
    manual_drawn: Optional[StrictInt] = None
    manual_lost: Optional[StrictInt] = None
    manual_gf: Optional[StrictInt] = None
    manual_ga: Optional[StrictInt] = None
