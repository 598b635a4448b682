from pydantic import BaseModel, StrictInt


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class PlayerLoginRequest(BaseModel):
    player_id: StrictInt
    pin: str
