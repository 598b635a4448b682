from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.common import DeleteRequest
from clubhouse.schemas.highlights import HighlightCreateRequest
from clubhouse.services import highlight_service
from clubhouse.services.auth_service import require_admin

router = APIRouter(prefix="/api/highlights", tags=["highlights"])


@router.get("")
def list_highlights(db: Session = Depends(get_db)):
    return [highlight_service.serialize_highlight(h) for h in highlight_service.get_all(db)]


@router.post("", dependencies=[Depends(require_admin)])
def create_highlight(req: HighlightCreateRequest, db: Session = Depends(get_db)):
    highlight = highlight_service.create(db, **req.model_dump())
    return JSONResponse(highlight_service.serialize_highlight(highlight), status_code=201)


@router.delete("", dependencies=[Depends(require_admin)])
def delete_highlight(req: DeleteRequest, db: Session = Depends(get_db)):
    highlight_service.delete(db, req.id)
    return {"success": True}
