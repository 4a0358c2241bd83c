"""Actions Lambda handler.

The job host invokes one Lambda per action with an event of the form::

    {
        "action": "revoke-session",
        "handler": "invoke" | "error" | "halt",
        "params": {...},
        "context": {"environment": {...}, "secrets": {...}}
    }

Errors propagate to the runtime; the host reads ``retryable`` to decide
whether to run the job again.
"""

import os
import re
import sys

# Add parent dir to path for shared modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from shared.config import get_logger
from shared.errors import FatalError, from_dict

logger = get_logger(__name__)

DEFAULT_ACTION = 'revoke-session'
HANDLERS = ('invoke', 'error', 'halt')

_ACTION_RE = re.compile(r'^[a-z][a-z0-9-]+$')


def lambda_handler(event, context):
    """Route a host event to the executor handler it names."""
    action_id = event.get('action') or DEFAULT_ACTION
    handler_name = event.get('handler') or 'invoke'
    params = dict(event.get('params') or {})
    job_context = event.get('context') or {}

    if handler_name not in HANDLERS:
        raise FatalError(f'Unknown handler: {handler_name}')

    if handler_name == 'error' and isinstance(params.get('error'), dict):
        params['error'] = from_dict(params['error'])

    logger.info('Dispatching %s.%s', action_id, handler_name)
    executor = _get_executor(action_id, handler_name)
    return executor(params, job_context)


def _get_executor(action_id, handler_name):
    """Dynamically import and return one handler of an action's executor module."""
    if not _ACTION_RE.match(action_id):
        raise FatalError(f'Unknown action: {action_id}')
    module_name = action_id.replace('-', '_')
    try:
        mod = __import__(f'actions.executors.{module_name}', fromlist=[handler_name])
    except ModuleNotFoundError as e:
        if e.name != f'actions.executors.{module_name}':
            raise
        raise FatalError(f'Unknown action: {action_id}') from e
    return getattr(mod, handler_name)
