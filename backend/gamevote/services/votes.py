"""Vote store: per-user game membership and the per-game vote counter.

Every change to a user's membership and the matching counter change are
committed in the same transaction, so ``Game.vote_count`` always equals
the number of ``Vote`` rows for that game as seen by any other session.
Counters are adjusted in SQL (``vote_count = vote_count + 1``), never by
reading the value into Python first.
"""
from dataclasses import dataclass, field
from typing import Iterable, List

from flask import current_app
from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError

from gamevote import db
from gamevote.exceptions import NotFoundError, ValidationError
from gamevote.models import Game, Vote
from .storage import storage_guard


@dataclass
class VoteChanges:
    added: List[int] = field(default_factory=list)
    removed: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)

    def to_dict(self):
        return {'added': self.added, 'removed': self.removed, 'skipped': self.skipped}


def _check_user(user_id) -> None:
    if not isinstance(user_id, str) or not user_id:
        raise ValidationError('A user id is required')


def _require_game(game_id) -> Game:
    game = db.session.get(Game, game_id)
    if game is None:
        raise NotFoundError('Game not found', {'game_id': game_id})
    return game


def _is_member(user_id: str, game_id: int) -> bool:
    return db.session.query(
        Vote.query.filter_by(user_id=user_id, game_id=game_id).exists()
    ).scalar()


def _bump(game_id: int, delta: int) -> None:
    db.session.execute(
        update(Game)
        .where(Game.id == game_id)
        .values(vote_count=Game.vote_count + delta)
        .execution_options(synchronize_session=False)
    )


def _delete_membership(user_id: str, game_id: int) -> bool:
    result = db.session.execute(
        delete(Vote)
        .where(Vote.user_id == user_id, Vote.game_id == game_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


def add_vote(user_id: str, game_id: int) -> bool:
    """Add ``game_id`` to the user's games. Returns False if it was already there."""
    _check_user(user_id)
    with storage_guard('add vote'):
        _require_game(game_id)
        if _is_member(user_id, game_id):
            return False
        try:
            db.session.add(Vote(user_id=user_id, game_id=game_id))
            db.session.flush()
            _bump(game_id, 1)
            db.session.commit()
        except IntegrityError:
            # A concurrent request inserted the same vote first
            db.session.rollback()
            return False
    current_app.logger.info(f"[vote-add] user={user_id} game={game_id}")
    return True


def remove_vote(user_id: str, game_id: int) -> bool:
    """Remove ``game_id`` from the user's games. Returns False if it was not there."""
    _check_user(user_id)
    with storage_guard('remove vote'):
        _require_game(game_id)
        if not _delete_membership(user_id, game_id):
            db.session.rollback()
            return False
        _bump(game_id, -1)
        db.session.commit()
    current_app.logger.info(f"[vote-remove] user={user_id} game={game_id}")
    return True


def replace_all_votes(user_id: str, game_ids: Iterable[int]) -> VoteChanges:
    """Make the user's games exactly ``game_ids``.

    Only the difference is applied, in one transaction. Ids that no longer
    resolve are skipped rather than failing the batch. If the commit
    fails, nothing is applied and the caller may retry the whole call.
    """
    _check_user(user_id)
    target = set(game_ids)
    changes = VoteChanges()
    with storage_guard('replace votes'):
        current = {row.game_id for row in db.session.query(Vote.game_id).filter(Vote.user_id == user_id)}

        for game_id in sorted(current - target):
            if _delete_membership(user_id, game_id):
                _bump(game_id, -1)
                changes.removed.append(game_id)

        for game_id in sorted(target - current):
            if db.session.get(Game, game_id) is None:
                current_app.logger.warning(f"[vote-replace] user={user_id} skipping unknown game={game_id}")
                changes.skipped.append(game_id)
                continue
            db.session.add(Vote(user_id=user_id, game_id=game_id))
            _bump(game_id, 1)
            changes.added.append(game_id)

        db.session.commit()
    current_app.logger.info(
        f"[vote-replace] user={user_id} added={changes.added} removed={changes.removed}"
    )
    return changes


def has_voted(user_id: str, game_id: int) -> bool:
    _check_user(user_id)
    with storage_guard('check vote'):
        return _is_member(user_id, game_id)


def get_user_game_names(user_id: str) -> List[str]:
    """Display names of the user's games, in the order they were chosen."""
    _check_user(user_id)
    with storage_guard('list user games'):
        rows = (
            db.session.query(Game.name)
            .join(Vote, Vote.game_id == Game.id)
            .filter(Vote.user_id == user_id)
            .order_by(Vote.id)
            .all()
        )
    return [row.name for row in rows]


def recount_votes() -> int:
    """Recompute every counter from the vote rows; returns how many were wrong."""
    with storage_guard('recount votes'):
        counts = dict(
            db.session.query(Vote.game_id, func.count(Vote.id)).group_by(Vote.game_id).all()
        )
        corrected = 0
        for game in Game.query.order_by(Game.id).all():
            actual = counts.get(game.id, 0)
            if game.vote_count != actual:
                current_app.logger.warning(
                    f"[recount] game={game.id} counter={game.vote_count} actual={actual}"
                )
                game.vote_count = actual
                corrected += 1
        db.session.commit()
    return corrected
