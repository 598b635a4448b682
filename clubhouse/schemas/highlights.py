from typing import Optional

from pydantic import BaseModel, StrictInt


class HighlightCreateRequest(BaseModel):
    title: str
    video_url: str
    thumbnail: Optional[str] = None
    match_id: Optional[StrictInt] = None
    pinned: bool = False
