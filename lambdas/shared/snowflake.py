"""Snowflake SQL API statement execution."""

import re

import requests

from shared.config import STATEMENTS_PATH, TOKEN_TYPE_HEADER, USER_AGENT
from shared.errors import FatalError, RetryableError

_BEARER_RE = re.compile(r'^Bearer\s+', re.IGNORECASE)


def determine_token_type(token: str) -> str:
    """Classify a token: three dot-separated segments looks like a signed JWT."""
    if token and len(token.split('.')) == 3:
        return 'KEYPAIR_JWT'
    return 'OAUTH'


def execute_statement(statement: str, auth_header: str, base_url: str) -> dict:
    """POST a single SQL statement and return the parsed JSON response.

    Raises:
        RetryableError: on 429 or any 5xx.
        FatalError: on 401, 403, 422 or any other non-2xx status.
    """
    token = _BEARER_RE.sub('', auth_header)

    headers = {
        'Authorization': auth_header,
        'Content-Type': 'application/json',
        'Accept': '*/*',
        'User-Agent': USER_AGENT,
        TOKEN_TYPE_HEADER: determine_token_type(token),
    }

    response = requests.post(f'{base_url}{STATEMENTS_PATH}', json={'statement': statement}, headers=headers)

    status = response.status_code
    if not 200 <= status < 300:
        if status == 429:
            raise RetryableError('Snowflake API rate limit exceeded')
        if status == 401:
            raise FatalError('Invalid or expired authentication token')
        if status == 403:
            raise FatalError('Insufficient permissions to execute statement')
        if status == 422:
            raise FatalError(f'Invalid SQL statement: {response.text}')
        if status >= 500:
            raise RetryableError(f'Snowflake API server error: {status}')
        raise FatalError(f'Failed to execute statement: {status} {response.reason} - {response.text}')

    return response.json()
