import logging

from botocore.exceptions import BotoCoreError, ClientError

from sharelinks.dao import create_share_link_dao
from sharelinks.dao.exceptions import DataStoreError, ShareLinkNotFoundError
from sharelinks.exceptions import ConfigurationError
from sharelinks.services import ShareLinkService
from sharelinks.types import LambdaEvent, LambdaContext, LambdaResponse
from sharelinks.utils import load_config, app_prefix, guarantee_500_response, ShareSettings
from sharelinks.utils.responses import response_200, response_400, response_404, response_500, response_503
from sharelinks.lambdas.get_share.constants import (
    MISSING_TOKEN,
    SHARE_NOT_FOUND,
    STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    SHARE_RESOLVED,
    RETRY_AFTER_SECONDS,
)


logger = logging.getLogger(__name__)


def extract_token(event: LambdaEvent) -> str | None:
    """Read the token from the path (`/share/{token}`) or the query string (`?token=`)."""
    path_parameters = event.get('pathParameters') or {}
    query_parameters = event.get('queryStringParameters') or {}
    return path_parameters.get('token') or query_parameters.get('token')


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to resolve share links

    This Lambda handler follows this procedure to resolve share links:
    - Step 1: Load the application's config
    - Step 2: Extract token from request path or query string
    - Step 3: Look up the target URL (via ShareLinkService)
    - Step 4: Respond to user with the target URL

    HTTP responses:
        200: Share link resolved
            url: target URL of the share link
        400: Bad client request
            message: missing token
        404: Not found
            message: share not found or has expired
        500: Internal server error
            message: server experienced an internal error
        503: Data store unavailable
            headers:
                Retry-After: seconds to wait before retrying

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the token path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'token': 'aZ3kQ9'}}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])
        {'url': 'https://example.edu/course/cs101'}
    """
    # 1- Get application's config
    try:
        app_config = load_config('get_share')
        settings = ShareSettings.from_config(app_config)
    except (ConfigurationError, KeyError, ClientError, BotoCoreError):
        logger.exception('Failed to load AppConfig for get share function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 2- Extract token from request
    token = extract_token(event)
    if not token:
        logger.info('Missing "token" in request. Responding with 400.', extra={'event': MISSING_TOKEN})
        return response_400(message="missing 'token' in path", error_code=MISSING_TOKEN)

    # 3- Look up the share link
    try:
        service = ShareLinkService(create_share_link_dao(app_config, prefix=app_prefix()), settings)
        target_url = service.resolve(token)
    except ShareLinkNotFoundError:
        logger.info('Share link not found or expired. Responding with 404.', extra={'token': token, 'event': SHARE_NOT_FOUND})
        return response_404(message='share not found or has expired', error_code=SHARE_NOT_FOUND)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'token': token, 'event': STORE_UNAVAILABLE})
        return response_503(retry_after=RETRY_AFTER_SECONDS, error_code=STORE_UNAVAILABLE)

    # 4- Return target URL to user
    logger.info('Share link resolved. Responding with 200.', extra={'token': token, 'event': SHARE_RESOLVED})
    return response_200({'url': target_url})
