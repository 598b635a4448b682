from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.points import AwardPointsRequest
from clubhouse.services import points_service
from clubhouse.services.auth_service import require_admin

router = APIRouter(prefix="/api/admin/points", tags=["points"], dependencies=[Depends(require_admin)])


@router.get("")
def list_points(db: Session = Depends(get_db)):
    return points_service.list_player_points(db)


@router.post("")
def award(req: AwardPointsRequest, db: Session = Depends(get_db)):
    count = points_service.award_points(db, req.player_ids, req.amount, req.description)
    return {"success": True, "players_awarded": count}


@router.get("/audit")
def audit(db: Session = Depends(get_db)):
    mismatches = points_service.audit_ledger(db)
    return {"consistent": not mismatches, "mismatches": mismatches}
