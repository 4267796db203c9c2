"""Discord OAuth2 helpers used by the login routes.

Only the ``identify`` scope is requested: the app needs the account id,
username and avatar hash, nothing else.
"""
import urllib.parse
from typing import Any, Dict

import requests
from flask import current_app

from gamevote.exceptions import AuthenticationError

SCOPE = 'identify'


def authorize_url(state: str) -> str:
    """URL of Discord's consent page for this application."""
    cfg = current_app.config
    query = urllib.parse.urlencode({
        'client_id': cfg['DISCORD_CLIENT_ID'],
        'redirect_uri': cfg['DISCORD_REDIRECT_URI'],
        'response_type': 'code',
        'scope': SCOPE,
        'state': state,
    })
    return f"{cfg['DISCORD_API_BASE']}/oauth2/authorize?{query}"


def exchange_code(code: str) -> str:
    """Trade an authorization code for an access token."""
    cfg = current_app.config
    try:
        resp = requests.post(
            f"{cfg['DISCORD_API_BASE']}/oauth2/token",
            data={
                'client_id': cfg['DISCORD_CLIENT_ID'],
                'client_secret': cfg['DISCORD_CLIENT_SECRET'],
                'grant_type': 'authorization_code',
                'code': code,
                'redirect_uri': cfg['DISCORD_REDIRECT_URI'],
            },
            headers={'Content-Type': 'application/x-www-form-urlencoded'},
            timeout=cfg.get('DISCORD_HTTP_TIMEOUT_SEC', 10),
        )
        resp.raise_for_status()
        token = resp.json().get('access_token')
    except (requests.RequestException, ValueError) as exc:
        raise AuthenticationError(f"Failed to obtain Discord token: {exc}") from exc

    if not token:
        raise AuthenticationError("Discord token response missing 'access_token'")
    return token


def fetch_profile(access_token: str) -> Dict[str, Any]:
    """Return ``{id, username, avatar}`` for the token's owner."""
    cfg = current_app.config
    try:
        resp = requests.get(
            f"{cfg['DISCORD_API_BASE']}/users/@me",
            headers={'Authorization': f"Bearer {access_token}"},
            timeout=cfg.get('DISCORD_HTTP_TIMEOUT_SEC', 10),
        )
        resp.raise_for_status()
        body = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise AuthenticationError(f"Failed to fetch Discord profile: {exc}") from exc

    if not body.get('id') or not body.get('username'):
        raise AuthenticationError('Discord profile is missing id or username')
    return {
        'id': str(body['id']),
        'username': body['username'],
        'avatar': body.get('avatar'),
    }
