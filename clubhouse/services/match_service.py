import logging
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from clubhouse.models.highlight import Highlight
from clubhouse.models.match import Match, MatchEvent, MatchAppearance
from clubhouse.models.player import Player
from clubhouse.models.point_transaction import PointTransaction, MOTM
from clubhouse.models.team import Team
from clubhouse.services.exceptions import NotFoundError, ValidationError
from clubhouse.services.points_service import credit, lock_player
from clubhouse.services.settings_service import get_settings

logger = logging.getLogger(__name__)

FILTERS = ("upcoming", "past", "all")


def get_by_id(db: Session, match_id: int) -> Match:
    match = db.get(Match, match_id)
    if not match:
        raise NotFoundError("Match not found")
    return match


def get_matches(db: Session, filter_name: str = "upcoming", now: datetime | None = None):
    if filter_name not in FILTERS:
        raise ValidationError("filter must be one of: upcoming, past, all")

    query = db.query(Match)
    if filter_name == "past":
        return (
            query.filter(Match.home_score.isnot(None), Match.away_score.isnot(None))
            .order_by(Match.date.desc())
            .all()
        )
    if filter_name == "upcoming":
        now = now or datetime.utcnow()
        query = query.filter(or_(Match.date >= now, Match.home_score.is_(None)))
    return query.order_by(Match.date).all()


def _check_scores(home_score, away_score):
    for score in (home_score, away_score):
        if score is not None and (not isinstance(score, int) or score < 0):
            raise ValidationError("Scores must be non-negative integers")


def _check_teams(db: Session, home_team_id: int, away_team_id: int):
    if home_team_id is None or away_team_id is None:
        raise ValidationError("Both teams are required")
    if home_team_id == away_team_id:
        raise ValidationError("A team cannot play itself")
    for team_id in (home_team_id, away_team_id):
        if not db.get(Team, team_id):
            raise NotFoundError("Team not found")


def create(db: Session, date: datetime, venue: str, home_team_id: int, away_team_id: int,
           home_score: int | None = None, away_score: int | None = None) -> Match:
    venue = (venue or "").strip()
    if not date or not venue:
        raise ValidationError("Date and venue required")
    _check_teams(db, home_team_id, away_team_id)
    _check_scores(home_score, away_score)

    match = Match(date=date, venue=venue, home_team_id=home_team_id, away_team_id=away_team_id)
    # scores only count as a pair
    if home_score is not None and away_score is not None:
        match.home_score = home_score
        match.away_score = away_score

    db.add(match)
    db.commit()
    db.refresh(match)
    return match


def _replace_events(db: Session, match: Match, events: list[dict]):
    match.events.clear()
    for e in events:
        if not e.get("type"):
            raise ValidationError("Every event needs a type")
        player_id = e.get("player_id")
        if player_id is not None and not db.get(Player, player_id):
            raise NotFoundError("Player not found")
        match.events.append(MatchEvent(
            player_id=player_id,
            type=e["type"],
            minute=e.get("minute"),
            notes=e.get("notes") or None,
        ))


def _replace_appearances(db: Session, match: Match, player_ids: list[int]):
    match.appearances.clear()
    db.flush()
    for player_id in dict.fromkeys(player_ids):
        if not db.get(Player, player_id):
            raise NotFoundError("Player not found")
        match.appearances.append(MatchAppearance(player_id=player_id))


def award_motm(db: Session, match: Match, events: list[dict]):
    """Pay the Man of the Match bonus once per match.

    Only an event list with exactly one ``motm`` entry naming a player
    qualifies. Returns the transaction, or None when nothing was paid.
    """
    motm = [e for e in events if e.get("type") == MOTM and e.get("player_id")]
    if len(motm) != 1:
        return None

    settings = get_settings(db)
    points = settings.motm_points or 0
    if points <= 0:
        return None

    already_paid = (
        db.query(PointTransaction)
        .filter(PointTransaction.type == MOTM, PointTransaction.match_id == match.id)
        .first()
    )
    if already_paid:
        return None

    player = lock_player(db, motm[0]["player_id"])
    logger.info("Man of the Match for match %s: player %s", match.id, player.id)
    return credit(db, player, points, MOTM, f"Man of the Match: Match #{match.id}", match_id=match.id)


def update(db: Session, match_id: int, **changes) -> Match:
    match = get_by_id(db, match_id)

    home_team_id = changes.get("home_team_id", match.home_team_id)
    away_team_id = changes.get("away_team_id", match.away_team_id)
    if "home_team_id" in changes or "away_team_id" in changes:
        _check_teams(db, home_team_id, away_team_id)
        match.home_team_id = home_team_id
        match.away_team_id = away_team_id

    if "home_score" in changes or "away_score" in changes:
        _check_scores(changes.get("home_score"), changes.get("away_score"))
        if "home_score" in changes:
            match.home_score = changes["home_score"]
        if "away_score" in changes:
            match.away_score = changes["away_score"]

    if changes.get("date") is not None:
        match.date = changes["date"]
    if "venue" in changes:
        venue = (changes["venue"] or "").strip()
        if not venue:
            raise ValidationError("Venue must not be empty")
        match.venue = venue
    if "cancelled" in changes:
        match.cancelled = bool(changes["cancelled"])
    if "cancel_reason" in changes:
        match.cancel_reason = changes["cancel_reason"] or None

    events = changes.get("events")
    if events is not None:
        _replace_events(db, match, events)
        award_motm(db, match, events)

    appearances = changes.get("appearances")
    if appearances is not None:
        _replace_appearances(db, match, appearances)

    db.commit()
    db.refresh(match)
    return match


def delete(db: Session, match_id: int) -> None:
    match = get_by_id(db, match_id)
    db.query(Highlight).filter(Highlight.match_id == match.id).update(
        {Highlight.match_id: None}, synchronize_session="fetch"
    )
    db.delete(match)
    db.commit()


def serialize_event(event: MatchEvent) -> dict:
    return {
        "id": event.id,
        "player_id": event.player_id,
        "player_name": event.player.name if event.player else None,
        "type": event.type,
        "minute": event.minute,
        "notes": event.notes,
    }


def serialize_match(match: Match, with_details: bool = True) -> dict:
    data = {
        "id": match.id,
        "date": match.date.isoformat(),
        "venue": match.venue,
        "home_team": {"id": match.home_team_id, "name": match.home_team.name if match.home_team else None},
        "away_team": {"id": match.away_team_id, "name": match.away_team.name if match.away_team else None},
        "home_score": match.home_score,
        "away_score": match.away_score,
        "completed": match.completed,
        "cancelled": match.cancelled,
        "cancel_reason": match.cancel_reason,
    }
    if with_details:
        data["events"] = [serialize_event(e) for e in match.events]
        data["appearances"] = [
            {"player_id": a.player_id, "player_name": a.player.name if a.player else None}
            for a in match.appearances
        ]
    return data
