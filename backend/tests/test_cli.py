from gamevote import db
from gamevote.models import Game
from gamevote.services import registry
from gamevote.services.votes import add_vote


def test_recount_votes_command(flask_app):
    chess = registry.resolve_or_create('Chess')
    add_vote('u1', chess)
    game = db.session.get(Game, chess)
    game.vote_count = 9
    db.session.commit()

    result = flask_app.test_cli_runner().invoke(args=['recount-votes'])
    assert result.exit_code == 0
    assert '1 counter(s) corrected' in result.output
    db.session.expire_all()
    assert db.session.get(Game, chess).vote_count == 1


def test_db_reset_seeds_games(flask_app):
    registry.resolve_or_create('Something Old')
    result = flask_app.test_cli_runner().invoke(args=['db-reset'])
    assert result.exit_code == 0
    names = [name for _, name in registry.list_all()]
    assert 'Something Old' not in names
    assert 'Minecraft' in names
