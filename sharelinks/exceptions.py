class ShareLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:sharelinks_error'


class ConfigurationError(ShareLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError, ValueError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
