from fastapi import APIRouter, Request, Depends, Query
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from fastapi.responses import HTMLResponse
from clubhouse.config import TEMPLATES_DIR
from clubhouse.database import get_db
from clubhouse.services.match_service import get_matches
from clubhouse.services.settings_service import get_settings
from clubhouse.services.standings_service import get_standings

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def index(request: Request, db: Session = Depends(get_db)):
    standings = get_standings(db)
    upcoming = [m for m in get_matches(db, "upcoming") if not m.cancelled][:5]
    settings = get_settings(db)

    return templates.TemplateResponse(
        request,
        "index.html",
        {"standings": standings, "upcoming": upcoming, "settings": settings}
    )


@router.get("/schedule", response_class=HTMLResponse)
def schedule(request: Request, db: Session = Depends(get_db), filter: str = Query("all")):
    matches = get_matches(db, filter)

    return templates.TemplateResponse(
        request,
        "schedule.html",
        {"matches": matches, "filter": filter}
    )
