"""Authorization header resolution for outbound API calls.

Credentials arrive in the job context. Strategies are tried in order and
the first one whose credentials are present produces the header:

1. bearer token secret
2. basic username + password secrets
3. OAuth2 authorization-code access token secret
4. OAuth2 client-credentials (fetches a fresh token)
"""

import base64

import requests

from shared.config import USER_AGENT
from shared.errors import FatalError


def _bearer(token: str) -> str:
    return token if token.startswith('Bearer ') else f'Bearer {token}'


def _basic(username: str, password: str) -> str:
    encoded = base64.b64encode(f'{username}:{password}'.encode()).decode()
    return f'Basic {encoded}'


def _from_bearer_token(environment: dict, secrets: dict) -> str | None:
    token = secrets.get('BEARER_AUTH_TOKEN')
    if not token:
        return None
    return _bearer(token)


def _from_basic_credentials(environment: dict, secrets: dict) -> str | None:
    username = secrets.get('BASIC_USERNAME')
    password = secrets.get('BASIC_PASSWORD')
    if not username or not password:
        return None
    return _basic(username, password)


def _from_authorization_code(environment: dict, secrets: dict) -> str | None:
    token = secrets.get('OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN')
    if not token:
        return None
    return _bearer(token)


def _from_client_credentials(environment: dict, secrets: dict) -> str | None:
    client_secret = secrets.get('OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET')
    if not client_secret:
        return None

    token_url = environment.get('OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL')
    client_id = environment.get('OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID')
    if not token_url or not client_id:
        raise FatalError('OAuth2 Client Credentials flow requires TOKEN_URL and CLIENT_ID')

    token = fetch_client_credentials_token(
        token_url=token_url,
        client_id=client_id,
        client_secret=client_secret,
        scope=environment.get('OAUTH2_CLIENT_CREDENTIALS_SCOPE'),
        audience=environment.get('OAUTH2_CLIENT_CREDENTIALS_AUDIENCE'),
        auth_style=environment.get('OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE'),
    )
    return f'Bearer {token}'


AUTH_STRATEGIES = [
    ('bearer', _from_bearer_token),
    ('basic', _from_basic_credentials),
    ('oauth2_authorization_code', _from_authorization_code),
    ('oauth2_client_credentials', _from_client_credentials),
]


def fetch_client_credentials_token(
    token_url: str,
    client_id: str,
    client_secret: str,
    scope: str = None,
    audience: str = None,
    auth_style: str = None,
) -> str:
    """Request an access token with the OAuth2 client-credentials grant.

    Args:
        token_url: Token endpoint.
        client_id: OAuth2 client id.
        client_secret: OAuth2 client secret.
        scope: Optional space-delimited scope.
        audience: Optional audience claim.
        auth_style: 'InParams' sends the client credentials as form fields;
                    anything else sends them as a Basic Authorization header.

    Returns:
        The raw access token.
    """
    form = {'grant_type': 'client_credentials'}
    if scope:
        form['scope'] = scope
    if audience:
        form['audience'] = audience

    headers = {
        'Content-Type': 'application/x-www-form-urlencoded',
        'Accept': 'application/json',
        'User-Agent': USER_AGENT,
    }
    if auth_style == 'InParams':
        form['client_id'] = client_id
        form['client_secret'] = client_secret
    else:
        headers['Authorization'] = _basic(client_id, client_secret)

    response = requests.post(token_url, data=form, headers=headers)
    if not 200 <= response.status_code < 300:
        raise FatalError(
            f'OAuth2 token request failed: {response.status_code} {response.reason} - {response.text}'
        )

    access_token = response.json().get('access_token')
    if not access_token:
        raise FatalError('No access_token in OAuth2 response')
    return access_token


def get_authorization_header(context: dict) -> str:
    """Return the Authorization header value for the configured credentials."""
    environment = context.get('environment') or {}
    secrets = context.get('secrets') or {}

    for _name, strategy in AUTH_STRATEGIES:
        header = strategy(environment, secrets)
        if header:
            return header

    raise FatalError('No authentication configured')
