"""create user, game and vote tables

Revision ID: 5c2e9a7b1d40
Revises:
Create Date: 2026-10-19 10:12:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a7b1d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('username', sa.String(length=128), nullable=False),
        sa.Column('avatar', sa.String(length=128), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('normalized_key', sa.String(length=128), nullable=False),
        sa.Column('vote_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('vote_count >= 0', name='ck_game_vote_count_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    # The unique index is what makes concurrent first submissions of a name safe
    op.create_index('ix_game_normalized_key', 'game', ['normalized_key'], unique=True)
    op.create_table(
        'vote',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'game_id', name='uq_vote_user_game'),
    )
    op.create_index('ix_vote_user_id', 'vote', ['user_id'], unique=False)
    op.create_index('ix_vote_game_id', 'vote', ['game_id'], unique=False)


def downgrade():
    op.drop_index('ix_vote_game_id', table_name='vote')
    op.drop_index('ix_vote_user_id', table_name='vote')
    op.drop_table('vote')
    op.drop_index('ix_game_normalized_key', table_name='game')
    op.drop_table('game')
    op.drop_table('user')
