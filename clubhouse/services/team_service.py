from sqlalchemy import or_
from sqlalchemy.orm import Session

from clubhouse.models.highlight import Highlight
from clubhouse.models.match import Match
from clubhouse.models.team import Team
from clubhouse.services.exceptions import ConflictError, NotFoundError, ValidationError

MANUAL_FIELDS = ("manual_won", "manual_drawn", "manual_lost", "manual_gf", "manual_ga")


def get_all(db: Session):
    return db.query(Team).order_by(Team.name).all()


def get_by_id(db: Session, team_id: int) -> Team:
    team = db.get(Team, team_id)
    if not team:
        raise NotFoundError("Team not found")
    return team


def _clean_name(db: Session, name, team_id=None) -> str:
    name = (name or "").strip() if isinstance(name, str) else ""
    if not name:
        raise ValidationError("Team name is required")
    existing = db.query(Team).filter(Team.name == name).first()
    if existing and existing.id != team_id:
        raise ConflictError("Team already exists")
    return name


def create(db: Session, name: str) -> Team:
    team = Team(name=_clean_name(db, name))
    db.add(team)
    db.commit()
    db.refresh(team)
    return team


def update(db: Session, team_id: int, **changes) -> Team:
    team = get_by_id(db, team_id)

    if "name" in changes:
        team.name = _clean_name(db, changes["name"], team_id=team.id)

    for field in MANUAL_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if not isinstance(value, int) or value < 0:
            raise ValidationError(f"{field} must be a non-negative integer")
        setattr(team, field, value)

    db.commit()
    db.refresh(team)
    return team


def delete(db: Session, team_id: int) -> None:
    """Delete a team together with every match it played in."""
    team = get_by_id(db, team_id)
    matches = db.query(Match).filter(
        or_(Match.home_team_id == team_id, Match.away_team_id == team_id)
    ).all()
    match_ids = [m.id for m in matches]
    if match_ids:
        db.query(Highlight).filter(Highlight.match_id.in_(match_ids)).update(
            {Highlight.match_id: None}, synchronize_session="fetch"
        )
    for match in matches:
        db.delete(match)
    db.delete(team)
    db.commit()


def serialize_team(team: Team) -> dict:
    return {
        "id": team.id,
        "name": team.name,
        **{f: getattr(team, f) for f in MANUAL_FIELDS},
    }
