"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile (typically
`backend-config`) and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 3,
        "active_backend": "redis",
        "share": {
            "token_length": 6,
            "ttl_seconds": 604800,
            "base_url": "https://beyondsyllabus.in/share",
            "max_generation_attempts": 50
        },
        "configs": {
            "create_share": {
                "redis": { ... }
            },
            "get_share": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own backend section (e.g., `"create_share"`) plus the
shared `"share"` settings from this AppConfig document.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig and
        return it as a Python dictionary. In SAM, load configuration
        from a local AppConfig agent.

Classes:
    ShareSettings
        Validated share link settings (token length, TTL, base URL, ...).

Example:
    Typical usage inside a Lambda handler:

        >>> from sharelinks.utils.config import load_config, ShareSettings
        >>> config = load_config('create_share')
        >>> config['active_backend']
        'redis'
        >>> ShareSettings.from_config(config).ttl_seconds
        604800
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from dataclasses import dataclass, fields
from collections.abc import Callable
from typing import Any

import boto3

from sharelinks.constants import ENV, TTL, Defaults
from sharelinks.exceptions import BadConfigurationError
from sharelinks.types import AppConfig
from sharelinks.utils.helpers import require_environment
from sharelinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'sharelinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'sharelinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class ShareSettings:
    """Share link issuance settings.

    Attributes:
        token_length (int):
            Number of characters per generated token.
        ttl_seconds (int):
            Lifetime of a share link, counted from its creation.
        base_url (str):
            Public address prefix of share links (token is appended).
        max_generation_attempts (int):
            Upper bound of token draws per share link creation.

    Raises:
        BadConfigurationError:
            If any setting has an invalid type or value.
    """

    token_length: int = Defaults.TOKEN_LENGTH
    ttl_seconds: int = TTL.ONE_WEEK
    base_url: str = Defaults.BASE_URL
    max_generation_attempts: int = Defaults.MAX_GENERATION_ATTEMPTS

    def __post_init__(self) -> None:
        for name in ('token_length', 'ttl_seconds', 'max_generation_attempts'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise BadConfigurationError(f"Setting '{name}' must be of type integer (given type: {type(value)}).")
            if value < 1:
                raise BadConfigurationError(f"Setting '{name}' must be a positive integer (given value: {value}).")
        if not isinstance(self.base_url, str) or not self.base_url:
            raise BadConfigurationError(f"Setting 'base_url' must be a non-empty string (given value: {self.base_url!r}).")

    @classmethod
    def from_config(cls, app_config: AppConfig) -> 'ShareSettings':
        """Build settings from the `share` section of a loaded configuration.

        Missing keys fall back to their defaults; unknown keys are rejected.
        """
        section: dict[str, Any] = app_config.get('share') or {}
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise BadConfigurationError(f'Unknown share settings: {", ".join(unknown)}')
        return cls(**section)


def _extract_lambda_config(document: dict, lambda_name: str) -> AppConfig:
    # Backends without connection parameters (memory) may omit their section
    backend = document['active_backend']
    return {
        'active_backend': backend,
        backend: document['configs'][lambda_name].get(backend, {}),
        'share': document.get('share', {}),
    }


def _validate_agent_url(url: str | None) -> str:
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise BadConfigurationError(f'Bad scheme {url}')
    if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
        raise BadConfigurationError(f'Bad host {url}')
    if components.port not in {2772, None}:
        raise BadConfigurationError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable[[str], AppConfig]) -> Callable[[str], AppConfig]:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     – Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  – Optional profile name (default: "backend-config").
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> AppConfig:
        agent_url = _validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return _extract_lambda_config(document, lambda_name)

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> AppConfig:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'create_share', 'get_share').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "create_share" or "get_share").

    Returns:
        dict: {"active_backend": <backend>, <backend>: {...}, "share": {...}}

    Example:
        >>> app_config = load_config('create_share')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return _extract_lambda_config(document, lambda_name)
