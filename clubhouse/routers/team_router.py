from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.common import DeleteRequest
from clubhouse.schemas.teams import TeamCreateRequest, TeamUpdateRequest
from clubhouse.services import team_service
from clubhouse.services.auth_service import require_admin

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("")
def list_teams(db: Session = Depends(get_db)):
    return [team_service.serialize_team(t) for t in team_service.get_all(db)]


@router.post("", dependencies=[Depends(require_admin)])
def create_team(req: TeamCreateRequest, db: Session = Depends(get_db)):
    team = team_service.create(db, req.name)
    return JSONResponse(team_service.serialize_team(team), status_code=201)


@router.patch("", dependencies=[Depends(require_admin)])
def update_team(req: TeamUpdateRequest, db: Session = Depends(get_db)):
    changes = req.model_dump(exclude_unset=True, exclude={"id"})
    team = team_service.update(db, req.id, **changes)
    return team_service.serialize_team(team)


@router.delete("", dependencies=[Depends(require_admin)])
def delete_team(req: DeleteRequest, db: Session = Depends(get_db)):
    team_service.delete(db, req.id)
    return {"success": True}
