"""Shared fixtures and helpers for action tests."""

import os
import sys
from unittest.mock import MagicMock

import pytest
import yaml

# ---------------------------------------------------------------------------
# Path setup: make lambdas/ importable as top-level packages
# ---------------------------------------------------------------------------
_repo_root = os.path.join(os.path.dirname(__file__), '..')
_lambdas_dir = os.path.join(_repo_root, 'lambdas')
sys.path.insert(0, _lambdas_dir)

BASE_URL = 'https://test-account.snowflakecomputing.com'


# ---------------------------------------------------------------------------
# Fixtures — job contexts for each auth strategy
# ---------------------------------------------------------------------------
@pytest.fixture
def bearer_context():
    """Context authenticated with a pre-issued bearer token."""
    return {
        'environment': {'ADDRESS': BASE_URL},
        'secrets': {'BEARER_AUTH_TOKEN': 'test-snowflake-token-123456'},
    }


@pytest.fixture
def client_credentials_context():
    """Context configured for the OAuth2 client-credentials flow."""
    return {
        'environment': {
            'ADDRESS': BASE_URL,
            'OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL': 'https://idp.example.com/oauth/token',
            'OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID': 'client-abc',
            'OAUTH2_CLIENT_CREDENTIALS_SCOPE': 'session:role:SECURITYADMIN',
        },
        'secrets': {'OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET': 'shh'},
    }


@pytest.fixture
def manifest():
    """Load the real manifests/revoke-session.yaml as a dict."""
    with open(os.path.join(_repo_root, 'manifests', 'revoke-session.yaml')) as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Helper — fake requests.Response
# ---------------------------------------------------------------------------
def make_response(status_code=200, json_body=None, text='', reason='OK'):
    """Build a MagicMock shaped like the parts of requests.Response we read."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.text = text
    response.json.return_value = json_body if json_body is not None else {}
    return response
