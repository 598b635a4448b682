import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.encoders import jsonable_encoder

from clubhouse.config import STATIC_DIR, get_log_level
from clubhouse.database import engine, Base
from clubhouse.models import team, match, player, point_transaction, training, highlight, site_settings  # noqa: F401
from clubhouse.routers import (
    home_router,
    auth_router,
    team_router,
    match_router,
    standings_router,
    player_router,
    training_router,
    points_router,
    settings_router,
    highlight_router,
    upload_router,
)
from clubhouse.services.exceptions import ServiceError

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Clubhouse")

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request, exc):
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors()), "kind": "validation"},
    )


@app.exception_handler(ServiceError)
def service_error_handler(request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
    )


app.include_router(home_router.router)
app.include_router(auth_router.router)
app.include_router(team_router.router)
app.include_router(match_router.router)
app.include_router(standings_router.router)
app.include_router(player_router.router)
app.include_router(training_router.router)
app.include_router(points_router.router)
app.include_router(settings_router.router)
app.include_router(highlight_router.router)
app.include_router(upload_router.router)
