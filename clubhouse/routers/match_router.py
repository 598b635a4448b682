from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.common import DeleteRequest
from clubhouse.schemas.matches import MatchCreateRequest, MatchUpdateRequest
from clubhouse.services import match_service
from clubhouse.services.auth_service import require_admin

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("")
def list_matches(filter: str = Query("upcoming"), db: Session = Depends(get_db)):
    matches = match_service.get_matches(db, filter)
    return [match_service.serialize_match(m) for m in matches]


@router.get("/{match_id}")
def get_match(match_id: int, db: Session = Depends(get_db)):
    return match_service.serialize_match(match_service.get_by_id(db, match_id))


@router.post("", dependencies=[Depends(require_admin)])
def create_match(req: MatchCreateRequest, db: Session = Depends(get_db)):
    match = match_service.create(
        db,
        date=req.date,
        venue=req.venue,
        home_team_id=req.home_team_id,
        away_team_id=req.away_team_id,
        home_score=req.home_score,
        away_score=req.away_score,
    )
    return JSONResponse(match_service.serialize_match(match), status_code=201)


@router.patch("", dependencies=[Depends(require_admin)])
def update_match(req: MatchUpdateRequest, db: Session = Depends(get_db)):
    changes = req.model_dump(exclude_unset=True, exclude={"id"})
    match = match_service.update(db, req.id, **changes)
    return match_service.serialize_match(match)


@router.delete("", dependencies=[Depends(require_admin)])
def delete_match(req: DeleteRequest, db: Session = Depends(get_db)):
    match_service.delete(db, req.id)
    return {"success": True}
