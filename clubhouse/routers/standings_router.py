from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.services import team_service
from clubhouse.services.report_service import standings_pdf
from clubhouse.services.standings_service import get_standings

router = APIRouter(tags=["standings"])


@router.get("/api/standings")
def standings(db: Session = Depends(get_db)):
    table = get_standings(db)
    teams = [{"id": t.id, "name": t.name} for t in team_service.get_all(db)]
    return {"standings": [row.to_dict() for row in table], "teams": teams}


@router.get("/standings/pdf")
def standings_as_pdf(db: Session = Depends(get_db)):
    buffer = standings_pdf(get_standings(db))
    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=standings.pdf"},
    )
