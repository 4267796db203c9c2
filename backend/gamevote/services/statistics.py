from typing import Dict, List, Optional, Union

from flask import current_app

from gamevote import db
from gamevote.models import Game
from .storage import storage_guard


def global_statistics(include_empty: Optional[bool] = None) -> List[Dict[str, Union[str, int]]]:
    """Vote totals per game, most voted first (ties by creation order).

    Games nobody currently votes for are listed unless ``include_empty`` is
    False; when None, ``STATS_INCLUDE_EMPTY`` decides.
    """
    if include_empty is None:
        include_empty = current_app.config.get('STATS_INCLUDE_EMPTY', True)
    with storage_guard('read statistics'):
        query = db.session.query(Game.name, Game.vote_count)
        if not include_empty:
            query = query.filter(Game.vote_count > 0)
        rows = query.order_by(Game.vote_count.desc(), Game.id).all()
    return [{'name': row.name, 'votes': row.vote_count} for row in rows]
