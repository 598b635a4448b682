from pydantic import BaseModel, StrictInt


class DeleteRequest(BaseModel):
    id: StrictInt
