from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.common import DeleteRequest
from clubhouse.schemas.training import (
    ConfirmTrainingRequest,
    RsvpRequest,
    TrainingCreateRequest,
    TrainingUpdateRequest,
)
from clubhouse.services import training_service
from clubhouse.services.auth_service import is_admin, require_admin, require_player, session_player_id

router = APIRouter(prefix="/api/training", tags=["training"])


@router.get("")
def list_trainings(request: Request, db: Session = Depends(get_db)):
    if is_admin(request):
        return training_service.trainings_for_admin(db)
    player_id = session_player_id(request)
    if player_id is None:
        return []
    return training_service.trainings_for_player(db, player_id)


@router.post("", dependencies=[Depends(require_admin)])
def create_training(req: TrainingCreateRequest, db: Session = Depends(get_db)):
    training = training_service.create(db, req.date, req.location, req.notes)
    return JSONResponse(training_service.serialize_training(training), status_code=201)


@router.patch("", dependencies=[Depends(require_admin)])
def update_training(req: TrainingUpdateRequest, db: Session = Depends(get_db)):
    changes = req.model_dump(exclude_unset=True, exclude={"id"})
    training = training_service.update(db, req.id, **changes)
    return training_service.serialize_training(training)


@router.delete("", dependencies=[Depends(require_admin)])
def delete_training(req: DeleteRequest, db: Session = Depends(get_db)):
    training_service.delete(db, req.id)
    return {"success": True}


@router.post("/rsvp")
def rsvp(req: RsvpRequest, player_id: int = Depends(require_player), db: Session = Depends(get_db)):
    result = training_service.set_rsvp(db, req.training_id, player_id, req.status)
    return training_service.serialize_rsvp(result)


@router.post("/confirm", dependencies=[Depends(require_admin)])
def confirm(req: ConfirmTrainingRequest, db: Session = Depends(get_db)):
    return training_service.confirm_training(db, req.training_id, req.attended_player_ids)
