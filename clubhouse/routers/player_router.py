from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.common import DeleteRequest
from clubhouse.schemas.players import (
    CardRequest,
    PinRequest,
    PlayerCreateRequest,
    PlayerUpdateRequest,
    UpgradeRequest,
)
from clubhouse.services import player_service, progression_service
from clubhouse.services.auth_service import require_admin, require_player
from clubhouse.services.dashboard_service import player_dashboard

router = APIRouter(prefix="/api", tags=["players"])


# Roster
@router.get("/players")
def list_players(db: Session = Depends(get_db)):
    return [player_service.serialize_player(p) for p in player_service.get_all(db)]


@router.post("/players", dependencies=[Depends(require_admin)])
def create_player(req: PlayerCreateRequest, db: Session = Depends(get_db)):
    player = player_service.create(db, **req.model_dump())
    return JSONResponse(player_service.serialize_player(player), status_code=201)


@router.patch("/players", dependencies=[Depends(require_admin)])
def update_player(req: PlayerUpdateRequest, db: Session = Depends(get_db)):
    changes = req.model_dump(exclude_unset=True, exclude={"id"})
    player = player_service.update(db, req.id, **changes)
    return player_service.serialize_player(player)


@router.delete("/players", dependencies=[Depends(require_admin)])
def delete_player(req: DeleteRequest, db: Session = Depends(get_db)):
    player_service.delete(db, req.id)
    return {"success": True}


@router.patch("/admin/pins", dependencies=[Depends(require_admin)])
def set_pin(req: PinRequest, db: Session = Depends(get_db)):
    player = player_service.set_pin(db, req.player_id, req.pin)
    return player_service.serialize_player(player)


@router.get("/leaderboard")
def leaderboard(db: Session = Depends(get_db)):
    return player_service.leaderboard(db)


@router.get("/stats/players")
def player_stats(db: Session = Depends(get_db)):
    return player_service.season_stats(db)


# Logged-in player actions
@router.get("/player/dashboard")
def dashboard(player_id: int = Depends(require_player), db: Session = Depends(get_db)):
    return player_dashboard(db, player_id)


@router.post("/player/upgrade")
def upgrade(req: UpgradeRequest, player_id: int = Depends(require_player), db: Session = Depends(get_db)):
    player = progression_service.upgrade_stat(db, player_id, req.stat)
    return player_service.serialize_player(player)


@router.post("/player/unlock-card")
def unlock_card(req: CardRequest, player_id: int = Depends(require_player), db: Session = Depends(get_db)):
    player = progression_service.unlock_card(db, player_id, req.card_type)
    return player_service.serialize_player(player)


@router.post("/player/switch-card")
def switch_card(req: CardRequest, player_id: int = Depends(require_player), db: Session = Depends(get_db)):
    player = progression_service.switch_card(db, player_id, req.card_type)
    return player_service.serialize_player(player)
