from gamevote.services import registry
from gamevote.services.statistics import global_statistics
from gamevote.services.votes import add_vote, remove_vote


def test_chess_scenario(flask_app):
    chess = registry.resolve_or_create('Chess')
    for user in ('u1', 'u2', 'u3'):
        add_vote(user, chess)
    remove_vote('u3', chess)
    assert global_statistics() == [{'name': 'Chess', 'votes': 2}]


def test_ordered_by_votes_then_creation(flask_app):
    go = registry.resolve_or_create('Go')
    chess = registry.resolve_or_create('Chess')
    shogi = registry.resolve_or_create('Shogi')
    registry.resolve_or_create('Xiangqi')
    add_vote('u1', chess)
    add_vote('u2', chess)
    add_vote('u1', go)
    add_vote('u1', shogi)
    assert global_statistics() == [
        {'name': 'Chess', 'votes': 2},
        {'name': 'Go', 'votes': 1},
        {'name': 'Shogi', 'votes': 1},
        {'name': 'Xiangqi', 'votes': 0},
    ]


def test_empty_games_can_be_excluded(flask_app):
    chess = registry.resolve_or_create('Chess')
    registry.resolve_or_create('Go')
    add_vote('u1', chess)
    assert global_statistics(include_empty=False) == [{'name': 'Chess', 'votes': 1}]
    flask_app.config['STATS_INCLUDE_EMPTY'] = False
    assert global_statistics() == [{'name': 'Chess', 'votes': 1}]
    assert len(global_statistics(include_empty=True)) == 2
