import secrets

from flask import Blueprint, current_app, jsonify, redirect, request, session
from flask_login import current_user, login_required, login_user, logout_user

from gamevote.exceptions import AuthenticationError
from gamevote.services import discord
from gamevote.services.users import add_or_update_user

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the gamevote server!'})


@main.route('/auth/discord')
def discord_login():
    state = secrets.token_urlsafe(16)
    session['oauth_state'] = state
    return redirect(discord.authorize_url(state))


@main.route('/auth/discord/callback')
def discord_callback():
    expected_state = session.pop('oauth_state', None)
    if not expected_state or request.args.get('state') != expected_state:
        return jsonify({'error': 'Invalid OAuth state'}), 400
    code = request.args.get('code')
    if not code:
        return jsonify({'error': 'Missing authorization code'}), 400

    try:
        token = discord.exchange_code(code)
        profile = discord.fetch_profile(token)
    except AuthenticationError as exc:
        current_app.logger.warning(f"[auth] discord login failed: {exc}")
        return jsonify({'error': 'Discord login failed'}), exc.status_code

    user = add_or_update_user(profile['id'], profile['username'], profile.get('avatar'))
    login_user(user, remember=True)
    current_app.logger.info(f"[auth] user={user.id} logged in")
    return redirect(current_app.config['FRONTEND_URL'])


@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully.'})


@main.route('/api/user')
@login_required
def get_current_user():
    return jsonify(current_user.to_dict())
