from dataclasses import dataclass, asdict

from sqlalchemy.orm import Session

from clubhouse.models.match import Match
from clubhouse.models.team import Team

WIN_POINTS = 3
DRAW_POINTS = 1


@dataclass
class TeamStanding:
    id: int
    name: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def counts_for_standings(match: Match) -> bool:
    return match.completed and not match.cancelled


def _seed(team: Team) -> TeamStanding:
    won = team.manual_won or 0
    drawn = team.manual_drawn or 0
    lost = team.manual_lost or 0
    return TeamStanding(
        id=team.id,
        name=team.name,
        played=won + drawn + lost,
        won=won,
        drawn=drawn,
        lost=lost,
        goals_for=team.manual_gf or 0,
        goals_against=team.manual_ga or 0,
        points=won * WIN_POINTS + drawn * DRAW_POINTS,
    )


def calculate_standings(teams, matches) -> list[TeamStanding]:
    """Build the league table from manual counters plus played matches.

    Matches that are unplayed, cancelled or reference unknown teams are
    skipped. The result is ordered by points, goal difference and goals
    scored (all descending), then by team name.
    """
    table = {team.id: _seed(team) for team in teams}

    for match in matches:
        if not counts_for_standings(match):
            continue
        home = table.get(match.home_team_id)
        away = table.get(match.away_team_id)
        if home is None or away is None:
            continue

        home_score, away_score = match.home_score, match.away_score

        home.played += 1
        away.played += 1
        home.goals_for += home_score
        home.goals_against += away_score
        away.goals_for += away_score
        away.goals_against += home_score

        if home_score > away_score:
            home.won += 1
            home.points += WIN_POINTS
            away.lost += 1
        elif home_score < away_score:
            away.won += 1
            away.points += WIN_POINTS
            home.lost += 1
        else:
            home.drawn += 1
            away.drawn += 1
            home.points += DRAW_POINTS
            away.points += DRAW_POINTS

    rows = list(table.values())
    for row in rows:
        row.goal_difference = row.goals_for - row.goals_against

    rows.sort(key=lambda r: (-r.points, -r.goal_difference, -r.goals_for, r.name.casefold(), r.name))
    return rows


def get_standings(db: Session) -> list[TeamStanding]:
    teams = db.query(Team).all()
    matches = (
        db.query(Match)
        .filter(
            Match.home_score.isnot(None),
            Match.away_score.isnot(None),
            Match.cancelled.is_(False),
        )
        .all()
    )
    return calculate_standings(teams, matches)
