from datetime import datetime, timezone

from flask import current_app
from flask_login import UserMixin

from gamevote import db


def _utcnow():
    return datetime.now(timezone.utc)


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    # External identity id as issued by the OAuth provider
    id = db.Column(db.String(64), primary_key=True)
    username = db.Column(db.String(128), nullable=False)
    avatar = db.Column(db.String(128), nullable=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    @property
    def avatar_url(self):
        cdn = current_app.config.get('DISCORD_CDN_BASE', 'https://cdn.discordapp.com')
        if self.avatar:
            return f"{cdn}/avatars/{self.id}/{self.avatar}.png"
        return f"{cdn}/embed/avatars/0.png"

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'avatar': self.avatar,
            'avatar_url': self.avatar_url,
        }


class Game(db.Model):
    __tablename__ = 'game'
    __table_args__ = (
        db.CheckConstraint('vote_count >= 0', name='ck_game_vote_count_non_negative'),
    )
    id = db.Column(db.Integer, primary_key=True)
    # First submitted spelling; never overwritten by later near-duplicates
    name = db.Column(db.String(128), nullable=False)
    normalized_key = db.Column(db.String(128), unique=True, nullable=False, index=True)
    # Cached cardinality of the game's votes, changed only alongside Vote rows
    vote_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    votes = db.relationship('Vote', back_populates='game', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'votes': self.vote_count,
        }


class Vote(db.Model):
    __tablename__ = 'vote'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'game_id', name='uq_vote_user_game'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    game = db.relationship('Game', back_populates='votes')
