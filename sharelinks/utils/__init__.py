from sharelinks.utils.config import app_env, app_name, app_prefix, load_config, ShareSettings
from sharelinks.utils.helpers import get_short_url, require_environment, guarantee_500_response
from sharelinks.utils.tokens import generate_token
from sharelinks.utils.logging import initialize_logging


__all__ = [
    'generate_token',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'ShareSettings',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
