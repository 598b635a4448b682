import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from clubhouse.models.player import Player
from clubhouse.models.point_transaction import PointTransaction, AWARD
from clubhouse.services.exceptions import (
    InsufficientPointsError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def lock_player(db: Session, player_id: int) -> Player:
    """Load a player row for update; spends must go through this."""
    player = (
        db.query(Player)
        .filter(Player.id == player_id)
        .with_for_update()
        .first()
    )
    if not player:
        raise NotFoundError("Player not found")
    return player


def _record(db: Session, player: Player, amount: int, tx_type: str, description: str, match_id=None):
    tx = PointTransaction(
        player_id=player.id,
        amount=amount,
        type=tx_type,
        description=description,
        match_id=match_id,
    )
    db.add(tx)
    return tx


def credit(db: Session, player: Player, amount: int, tx_type: str, description: str, match_id=None):
    """Add points to a player's balance and log the transaction.

    Does not commit; the caller owns the transaction.
    """
    if amount <= 0:
        raise ValidationError("Credit amount must be positive")
    player.point_balance += amount
    player.points_earned += amount
    logger.info("Credit %+d (%s) to player %s", amount, tx_type, player.id)
    return _record(db, player, amount, tx_type, description, match_id)


def debit(db: Session, player: Player, cost: int, tx_type: str, description: str):
    """Spend points. Fails without touching the player if the balance is short."""
    if cost < 0:
        raise ValidationError("Cost must not be negative")
    if player.point_balance < cost:
        raise InsufficientPointsError()
    player.point_balance -= cost
    player.points_spent += cost
    logger.info("Debit %d (%s) from player %s", cost, tx_type, player.id)
    return _record(db, player, -cost, tx_type, description)


def award_points(db: Session, player_ids: list[int], amount: int, description: str) -> int:
    """Admin grant (or deduction) applied to every listed player at once."""
    description = (description or "").strip()
    if not player_ids or not amount or not description:
        raise ValidationError("player_ids, amount, and description required")

    players = []
    for pid in dict.fromkeys(player_ids):
        player = lock_player(db, pid)
        if amount < 0 and player.point_balance + amount < 0:
            raise InsufficientPointsError(f"{player.name} does not have enough points")
        players.append(player)

    for player in players:
        player.point_balance += amount
        if amount > 0:
            player.points_earned += amount
        _record(db, player, amount, AWARD, description)

    db.commit()
    logger.info("Awarded %+d points to %d player(s): %s", amount, len(players), description)
    return len(players)


def recent_transactions(db: Session, player_id: int, limit: int = 20):
    return (
        db.query(PointTransaction)
        .filter(PointTransaction.player_id == player_id)
        .order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc())
        .limit(limit)
        .all()
    )


def list_player_points(db: Session) -> list[dict]:
    players = db.query(Player).order_by(Player.name).all()
    return [
        {
            "id": p.id,
            "name": p.name,
            "point_balance": p.point_balance,
            "points_earned": p.points_earned,
            "points_spent": p.points_spent,
            "transactions": [serialize_transaction(t) for t in recent_transactions(db, p.id, 10)],
        }
        for p in players
    ]


def ledger_balance(db: Session, player_id: int) -> int:
    total = (
        db.query(func.coalesce(func.sum(PointTransaction.amount), 0))
        .filter(PointTransaction.player_id == player_id)
        .scalar()
    )
    return int(total)


def audit_ledger(db: Session) -> list[dict]:
    """Players whose cached balance disagrees with their transaction log."""
    sums = dict(
        db.query(PointTransaction.player_id, func.sum(PointTransaction.amount))
        .group_by(PointTransaction.player_id)
        .all()
    )
    mismatches = []
    for player in db.query(Player).order_by(Player.id).all():
        ledger = int(sums.get(player.id) or 0)
        if ledger != player.point_balance:
            mismatches.append({
                "player_id": player.id,
                "name": player.name,
                "point_balance": player.point_balance,
                "ledger_balance": ledger,
            })
    if mismatches:
        logger.warning("Ledger mismatch for %d player(s)", len(mismatches))
    return mismatches


def serialize_transaction(tx: PointTransaction) -> dict:
    return {
        "id": tx.id,
        "player_id": tx.player_id,
        "amount": tx.amount,
        "type": tx.type,
        "description": tx.description,
        "match_id": tx.match_id,
        "created_at": tx.created_at.isoformat() if tx.created_at else None,
    }
