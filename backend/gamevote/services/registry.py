"""Game registry: maps normalized names to stable game ids.

The registry is append-only. A game is created the first time an unseen
key is submitted and keeps the spelling it was first submitted with.
"""
from typing import List, Optional, Tuple

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from gamevote import db
from gamevote.exceptions import NotFoundError, ValidationError
from gamevote.models import Game
from .normalizer import AGGRESSIVE, is_prefix_compatible, normalize
from .storage import storage_guard


def key_for(raw_name) -> str:
    """Normalize ``raw_name`` under the configured policy; reject empty keys."""
    if not isinstance(raw_name, str):
        raise ValidationError('Game name must be a string')
    key = normalize(raw_name, current_app.config.get('GAME_NAME_POLICY', AGGRESSIVE))
    if not key:
        raise ValidationError('Game name is required', {'name': raw_name})
    return key


def _find_by_key(key: str) -> Optional[Game]:
    game = Game.query.filter_by(normalized_key=key).first()
    if game is not None or not current_app.config.get('GAME_PREFIX_MATCHING'):
        return game
    # Stored keys extending this one, or stored keys this one extends
    shorter = [key[:i] for i in range(1, len(key))]
    candidates = (
        Game.query
        .filter(or_(Game.normalized_key.startswith(key), Game.normalized_key.in_(shorter)))
        .order_by(Game.id)
        .all()
    )
    for candidate in candidates:
        if is_prefix_compatible(key, candidate.normalized_key):
            return candidate
    return None


def resolve_or_create(raw_name) -> int:
    """Return the id of the game ``raw_name`` refers to, creating it if unseen.

    The unique constraint on ``normalized_key`` decides concurrent first
    submissions: the loser rolls back and returns the winner's id.
    """
    key = key_for(raw_name)
    display_name = raw_name.strip()
    max_length = current_app.config.get('MAX_GAME_NAME_LENGTH', 100)
    if len(display_name) > max_length:
        raise ValidationError(f'Game name must be at most {max_length} characters')

    with storage_guard('resolve game'):
        game = _find_by_key(key)
        if game is not None:
            return game.id

        game = Game(name=display_name, normalized_key=key, vote_count=0)
        db.session.add(game)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            game = Game.query.filter_by(normalized_key=key).first()
            if game is None:
                raise
            current_app.logger.info(f"[game-race] key={key} already created as game={game.id}")
            return game.id

        current_app.logger.info(f"[game-new] game={game.id} key={key} name={display_name!r}")
        return game.id


def lookup(raw_name) -> int:
    """Like :func:`resolve_or_create` but never creates; NotFoundError instead."""
    key = key_for(raw_name)
    with storage_guard('lookup game'):
        game = _find_by_key(key)
    if game is None:
        raise NotFoundError('Game not found', {'name': raw_name})
    return game.id


def get_game(game_id) -> Game:
    with storage_guard('load game'):
        game = db.session.get(Game, game_id)
    if game is None:
        raise NotFoundError('Game not found', {'game_id': game_id})
    return game


def list_all() -> List[Tuple[int, str]]:
    with storage_guard('list games'):
        rows = db.session.query(Game.id, Game.name).order_by(Game.id).all()
    return [(row.id, row.name) for row in rows]
