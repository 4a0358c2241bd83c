"""Revoke all active sessions for a Snowflake user.

Snowflake has no direct "sign out" call, so the user is disabled (which
terminates every session) and then re-enabled after a short delay.
"""

import time
from datetime import datetime, timezone

from shared.auth import get_authorization_header
from shared.config import get_base_url, get_logger
from shared.duration import parse_duration
from shared.errors import ActionError, FatalError, from_dict
from shared.snowflake import execute_statement

_logger = get_logger(__name__)


def validate_inputs(params: dict) -> None:
    username = params.get('username')
    if not isinstance(username, str) or not username.strip():
        raise FatalError('Invalid or missing username parameter')


def _statement_handle(response) -> str | bool:
    if isinstance(response, dict) and response.get('statementHandle'):
        return response['statementHandle']
    return True


def invoke(params: dict, context: dict, logger=None) -> dict:
    """Disable then re-enable the user, returning a summary of both statements.

    Params:
        username: Snowflake user (required).
        delay: Wait between disable and re-enable, e.g. '100ms', '1s'.
        address: Base URL override for the Snowflake API.

    No compensation is attempted: if the re-enable fails the user stays
    disabled and the error is surfaced for the host to retry.
    """
    logger = logger or _logger
    logger.info('Starting Snowflake Revoke Session action')

    try:
        validate_inputs(params)
        username = params['username']
        logger.info('Processing username: %s', username)

        auth_header = get_authorization_header(context)
        base_url = get_base_url(params, context)
        delay_ms = parse_duration(params.get('delay'))

        logger.info('Disabling user: %s', username)
        disable_result = execute_statement(f'ALTER USER {username} SET DISABLED = TRUE', auth_header, base_url)

        logger.info('Waiting %sms before re-enabling user', delay_ms)
        time.sleep(delay_ms / 1000)

        logger.info('Re-enabling user: %s', username)
        enable_result = execute_statement(f'ALTER USER {username} SET DISABLED = FALSE', auth_header, base_url)

        result = {
            'username': username,
            'sessionsRevoked': True,
            'userDisabled': _statement_handle(disable_result),
            'userReEnabled': _statement_handle(enable_result),
            'revokedAt': datetime.now(timezone.utc).isoformat(),
        }
        logger.info('Successfully revoked sessions for user: %s', username)
        return result

    except ActionError as e:
        logger.error('Error revoking Snowflake sessions: %s', e)
        raise
    except Exception as e:
        logger.error('Error revoking Snowflake sessions: %s', e)
        raise FatalError(f'Unexpected error: {e}') from e


def error(params: dict, context: dict, logger=None):
    """Log the failure and re-raise it untouched; retries belong to the host."""
    logger = logger or _logger
    err = params.get('error')
    if err is None:
        raise FatalError('Error handler invoked without an error')
    logger.error('Error handler invoked: %s', err)
    if isinstance(err, BaseException):
        raise err
    if isinstance(err, dict):
        raise from_dict(err)
    raise FatalError(str(err))


def halt(params: dict, context: dict, logger=None) -> dict:
    """Report a halt. Nothing to clean up: statements are already committed or not."""
    logger = logger or _logger
    reason = params.get('reason')
    logger.info('Job is being halted (%s)', reason)
    return {
        'username': params.get('username') or 'unknown',
        'reason': reason or 'unknown',
        'haltedAt': datetime.now(timezone.utc).isoformat(),
        'cleanupCompleted': True,
    }
