from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Share link TTL duration (data retention period) (7 days in seconds)
    ONE_WEEK = 604_800  # 60 * 60 * 24 * 7


class Defaults:
    """Default share link settings."""

    TOKEN_LENGTH = 6
    BASE_URL = 'https://beyondsyllabus.in/share'
    MAX_GENERATION_ATTEMPTS = 50


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        CORS_ORIGIN = 'CORS_ORIGIN'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
