from typing import Any, Dict, List, Optional

from pydantic import BaseModel, StrictInt


class SettingsUpdateRequest(BaseModel):
    team_photo_url: Optional[str] = None
    player_cards_on: Optional[bool] = None
    card_types: Optional[List[Dict[str, Any]]] = None
    points_per_training: Optional[StrictInt] = None
    upgrade_cost: Optional[StrictInt] = None
    motm_points: Optional[StrictInt] = None
    streak_bonus_3: Optional[StrictInt] = None
    streak_bonus_5: Optional[StrictInt] = None
    streak_bonus_10: Optional[StrictInt] = None
    show_goal_scorers: Optional[bool] = None
    show_highlights: Optional[bool] = None
    show_player_stats: Optional[bool] = None
    show_motm: Optional[bool] = None
    show_streaks: Optional[bool] = None
    show_levels: Optional[bool] = None
