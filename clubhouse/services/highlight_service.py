from sqlalchemy.orm import Session

from clubhouse.models.highlight import Highlight
from clubhouse.models.match import Match
from clubhouse.services.exceptions import NotFoundError, ValidationError


def get_all(db: Session):
    return (
        db.query(Highlight)
        .order_by(Highlight.pinned.desc(), Highlight.created_at.desc(), Highlight.id.desc())
        .all()
    )


def create(db: Session, title: str, video_url: str, thumbnail: str | None = None,
           match_id: int | None = None, pinned: bool = False) -> Highlight:
    title = (title or "").strip()
    video_url = (video_url or "").strip()
    if not title or not video_url:
        raise ValidationError("Title and video_url required")
    if match_id is not None and not db.get(Match, match_id):
        raise NotFoundError("Match not found")

    highlight = Highlight(
        title=title,
        video_url=video_url,
        thumbnail=thumbnail or None,
        match_id=match_id,
        pinned=bool(pinned),
    )
    db.add(highlight)
    db.commit()
    db.refresh(highlight)
    return highlight


def delete(db: Session, highlight_id: int) -> None:
    highlight = db.get(Highlight, highlight_id)
    if not highlight:
        raise NotFoundError("Highlight not found")
    db.delete(highlight)
    db.commit()


def serialize_highlight(highlight: Highlight) -> dict:
    match = highlight.match
    return {
        "id": highlight.id,
        "title": highlight.title,
        "video_url": highlight.video_url,
        "thumbnail": highlight.thumbnail,
        "pinned": highlight.pinned,
        "created_at": highlight.created_at.isoformat() if highlight.created_at else None,
        "match": None if match is None else {
            "id": match.id,
            "home_team": match.home_team.name if match.home_team else None,
            "away_team": match.away_team.name if match.away_team else None,
            "date": match.date.isoformat(),
        },
    }
