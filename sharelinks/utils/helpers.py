"""Helper utilities for AWS lambda functions.

Functions:
    get_short_url(token: str, base_url: str) -> str
        Get string representation of the share URL for a given token
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    >>> from sharelinks.utils.helpers import get_short_url
    >>> get_short_url('aZ3kQ9', 'https://beyondsyllabus.in/share/')
    'https://beyondsyllabus.in/share/aZ3kQ9'
"""

import os
import logging
import functools
from collections.abc import Callable

from sharelinks.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from sharelinks.exceptions import MissingEnvironmentVariableError
from sharelinks.types import LambdaEvent, LambdaContext, LambdaResponse
from sharelinks.utils.responses import response_500
from sharelinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def get_short_url(token: str, base_url: str) -> str:
    """Get string representation of a share URL

    Args:
        token (str): share token
        base_url (str): public base address of share links

    Returns:
        str: share url string representation
    """
    return f'{base_url.rstrip("/")}/{token}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.
            Subclasses KeyError.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: answer with a 500 response if the Lambda handler raises.

    When running locally (SAM), the original exception is re-raised instead
    so it shows up in the developer's terminal.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in Lambda handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
