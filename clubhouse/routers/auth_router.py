from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from clubhouse import config
from clubhouse.database import get_db
from clubhouse.models.player import Player
from clubhouse.schemas.auth import AdminLoginRequest, PlayerLoginRequest
from clubhouse.services import auth_service
from clubhouse.services.exceptions import AuthError

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/admin/login")
def admin_login(req: AdminLoginRequest):
    value = auth_service.admin_login(req.username, req.password)
    response = JSONResponse({"success": True})
    response.set_cookie(
        auth_service.ADMIN_COOKIE, value,
        **auth_service.cookie_options(config.get_admin_session_max_age()),
    )
    return response


@router.get("/admin/login")
def admin_status(request: Request):
    if not auth_service.is_admin(request):
        raise AuthError("Not authenticated")
    return {"authenticated": True}


@router.delete("/admin/login")
def admin_logout():
    response = JSONResponse({"success": True})
    response.delete_cookie(auth_service.ADMIN_COOKIE, path="/")
    return response


@router.post("/player/login")
def player_login(req: PlayerLoginRequest, db: Session = Depends(get_db)):
    value = auth_service.player_login(db, req.player_id, req.pin)
    response = JSONResponse({"success": True, "player_id": req.player_id})
    response.set_cookie(
        auth_service.PLAYER_COOKIE, value,
        **auth_service.cookie_options(config.get_player_session_max_age()),
    )
    return response


@router.get("/player/login")
def player_status(request: Request, db: Session = Depends(get_db)):
    player_id = auth_service.session_player_id(request)
    if player_id is None or not db.get(Player, player_id):
        raise AuthError("Not authenticated")
    return {"authenticated": True, "player_id": player_id}


@router.delete("/player/login")
def player_logout():
    response = JSONResponse({"success": True})
    response.delete_cookie(auth_service.PLAYER_COOKIE, path="/")
    return response
