from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.settings import SettingsUpdateRequest
from clubhouse.services import settings_service
from clubhouse.services.auth_service import require_admin

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("")
def get_settings(db: Session = Depends(get_db)):
    settings = settings_service.get_settings(db)
    db.commit()
    return settings_service.serialize_settings(settings)


@router.patch("", dependencies=[Depends(require_admin)])
def update_settings(req: SettingsUpdateRequest, db: Session = Depends(get_db)):
    settings = settings_service.update_settings(db, **req.model_dump(exclude_unset=True))
    return settings_service.serialize_settings(settings)
