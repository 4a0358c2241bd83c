"""Process-level settings and helpers shared by action executors.

Per-invocation settings come from the job context (environment + secrets);
only defaults live here.
"""

import logging
import os

from shared.errors import FatalError

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s - %(message)s'
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

USER_AGENT = os.environ.get('ACTION_USER_AGENT', 'SGNL-CAEP-Hub/2.0')


def _env_int(name: str, default: int) -> int:
    """Read an integer setting, falling back to the default when unset or malformed."""
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


DEFAULT_DELAY_MS = _env_int('DEFAULT_DELAY_MS', 100)

STATEMENTS_PATH = '/api/v2/statements'
TOKEN_TYPE_HEADER = 'X-Snowflake-Authorization-Token-Type'


def get_logger(name: str) -> logging.Logger:
    """Return a logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(LOG_LEVEL)
    return logger


def get_base_url(params: dict, context: dict) -> str:
    """Resolve the API base URL.

    The ``address`` parameter wins over the ADDRESS environment entry.
    Trailing slashes are removed so paths can be appended directly.
    """
    environment = context.get('environment') or {}
    address = params.get('address') or environment.get('ADDRESS')
    if not address:
        raise FatalError('No URL specified. Provide address parameter or ADDRESS environment variable')
    return address.rstrip('/')
