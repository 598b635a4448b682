from typing import List

from pydantic import BaseModel, StrictInt


class AwardPointsRequest(BaseModel):
    player_ids: List[StrictInt]
    amount: StrictInt
    description: str
