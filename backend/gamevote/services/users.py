from typing import Optional

from flask import current_app

from gamevote import db
from gamevote.exceptions import ValidationError
from gamevote.models import User
from .storage import storage_guard


def get_user_by_id(user_id) -> Optional[User]:
    if not user_id:
        return None
    with storage_guard('load user'):
        return db.session.get(User, str(user_id))


def add_or_update_user(user_id, username, avatar=None) -> User:
    """Insert the user or overwrite their profile; the last login wins."""
    if not user_id or not username:
        raise ValidationError('User id and username are required')
    with storage_guard('save user'):
        user = db.session.get(User, str(user_id))
        if user is None:
            user = User(id=str(user_id))
            db.session.add(user)
        user.username = str(username)
        user.avatar = avatar or None
        db.session.commit()
    current_app.logger.info(f"[user-upsert] user={user.id}")
    return user
