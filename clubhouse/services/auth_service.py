"""Cookie sessions for the admin and for individual players.

Cookie values are ``<payload>.<signature>`` where the signature is an
HMAC-SHA256 of the payload keyed by ``SECRET_KEY``.
"""
import hashlib
import hmac
import logging

from fastapi import Request
from sqlalchemy.orm import Session

from clubhouse import config
from clubhouse.models.player import Player
from clubhouse.services.exceptions import AuthError, ValidationError

logger = logging.getLogger(__name__)

ADMIN_COOKIE = "clubhouse_admin"
PLAYER_COOKIE = "clubhouse_player"
ADMIN_PAYLOAD = "admin"


def _sign(payload: str) -> str:
    key = config.get_secret_key().encode()
    digest = hmac.new(key, payload.encode(), hashlib.sha256).hexdigest()
    return f"{payload}.{digest}"


def _unsign(value: str | None) -> str | None:
    if not value or "." not in value:
        return None
    payload = value.rpartition(".")[0]
    if hmac.compare_digest(_sign(payload).encode(), value.encode()):
        return payload
    return None


def check_admin_credentials(username: str, password: str) -> bool:
    expected_password = config.get_admin_password()
    if not expected_password:
        logger.warning("Admin login attempted but ADMIN_PASSWORD is not configured")
        return False
    user_ok = hmac.compare_digest((username or "").encode(), config.get_admin_username().encode())
    pass_ok = hmac.compare_digest((password or "").encode(), expected_password.encode())
    return user_ok and pass_ok


def admin_login(username: str, password: str) -> str:
    """Return the admin cookie value for valid credentials."""
    if not check_admin_credentials(username, password):
        logger.warning("Failed admin login for '%s'", username)
        raise AuthError("Invalid credentials")
    logger.info("Admin logged in")
    return _sign(ADMIN_PAYLOAD)


def is_admin(request: Request) -> bool:
    return _unsign(request.cookies.get(ADMIN_COOKIE)) == ADMIN_PAYLOAD


def require_admin(request: Request) -> None:
    """FastAPI dependency guarding admin-only routes."""
    if not is_admin(request):
        raise AuthError("Unauthorized")


def player_login(db: Session, player_id: int, pin: str) -> str:
    """Return the player cookie value when the PIN matches."""
    if not player_id or not pin:
        raise ValidationError("Player and PIN required")
    player = db.get(Player, player_id)
    if not player or not player.pin or not hmac.compare_digest(player.pin.encode(), pin.encode()):
        logger.warning("Failed player login for player %s", player_id)
        raise AuthError("Invalid PIN")
    logger.info("Player %s logged in", player.id)
    return _sign(f"player:{player.id}")


def session_player_id(request: Request) -> int | None:
    payload = _unsign(request.cookies.get(PLAYER_COOKIE))
    if not payload or not payload.startswith("player:"):
        return None
    try:
        return int(payload.split(":", 1)[1])
    except ValueError:
        return None


def require_player(request: Request) -> int:
    """FastAPI dependency returning the logged-in player's id."""
    player_id = session_player_id(request)
    if player_id is None:
        raise AuthError("Not authenticated")
    return player_id


def cookie_options(max_age: int) -> dict:
    return {
        "httponly": True,
        "secure": config.get_cookie_secure(),
        "samesite": "lax",
        "max_age": max_age,
        "path": "/",
    }
