from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from gamevote.exceptions import ValidationError
from gamevote.services import registry
from gamevote.services.statistics import global_statistics
from gamevote.services.votes import add_vote, get_user_game_names, remove_vote, replace_all_votes
from gamevote.socketio_events import broadcast_statistics


votes = Blueprint('votes', __name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _flag(value):
    if value is None:
        return None
    return value.strip().lower() not in ('0', 'false', 'no', 'off')


@votes.route('/games/mine', methods=['GET'])
@login_required
def list_my_games():
    return jsonify(get_user_game_names(current_user.id))


@votes.route('/games', methods=['GET'])
@login_required
def list_all_games():
    return jsonify([name for _, name in registry.list_all()])


@votes.route('/votes', methods=['POST'])
@login_required
def replace_votes():
    names = _json_body().get('games')
    if not isinstance(names, list):
        return jsonify({'error': 'A list of games is required'}), 400

    game_ids = []
    for name in names:
        # Blank or unusable entries are dropped, not fatal to the list
        if not isinstance(name, str) or not name.strip():
            continue
        try:
            game_ids.append(registry.resolve_or_create(name))
        except ValidationError as exc:
            current_app.logger.info(f"[vote-replace] user={current_user.id} ignoring {name!r}: {exc}")

    changes = replace_all_votes(current_user.id, game_ids)
    if changes.added or changes.removed:
        broadcast_statistics()
    payload = {'message': 'Your games were updated successfully.'}
    payload.update(changes.to_dict())
    return jsonify(payload)


@votes.route('/games/add', methods=['POST'])
@login_required
def add_game():
    name = _json_body().get('name')
    if not name:
        return jsonify({'error': 'Game name is required'}), 400
    game_id = registry.resolve_or_create(name)
    if add_vote(current_user.id, game_id):
        broadcast_statistics()
    return jsonify({'message': 'Game added to your games.'})


@votes.route('/games/remove', methods=['POST'])
@login_required
def remove_game():
    name = _json_body().get('name')
    if not name:
        return jsonify({'error': 'Game name is required'}), 400
    game_id = registry.lookup(name)
    if remove_vote(current_user.id, game_id):
        broadcast_statistics()
    return jsonify({'message': 'Game removed from your games.'})


@votes.route('/votes/<int:game_id>', methods=['DELETE'])
@login_required
def delete_vote(game_id):
    if remove_vote(current_user.id, game_id):
        broadcast_statistics()
    return jsonify({'message': 'Game removed from your games.'})


@votes.route('/statistics', methods=['GET'])
def statistics():
    include_empty = _flag(request.args.get('include_empty'))
    return jsonify(global_statistics(include_empty=include_empty))
