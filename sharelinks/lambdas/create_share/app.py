import json
import logging

from botocore.exceptions import BotoCoreError, ClientError

from sharelinks.dao import create_share_link_dao
from sharelinks.dao.exceptions import DataStoreError, TokenSpaceExhaustedError
from sharelinks.exceptions import ConfigurationError
from sharelinks.services import ShareLinkService
from sharelinks.types import LambdaEvent, LambdaContext, LambdaResponse
from sharelinks.utils import load_config, app_prefix, guarantee_500_response, ShareSettings
from sharelinks.utils.responses import response_200, response_400, response_500, response_503
from sharelinks.lambdas.create_share.constants import (
    INVALID_JSON_BODY,
    MISSING_URL,
    STORE_UNAVAILABLE,
    TOKEN_SPACE_EXHAUSTED,
    CONFIGURATION_ERROR,
    SHARE_CREATED,
    RETRY_AFTER_SECONDS,
)


logger = logging.getLogger(__name__)

TRY_AGAIN = 'could not create share link, try again'


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to create share links

    This Lambda handler follows this procedure to create share links:
    - Step 1: Load the application's config
    - Step 2: Extract target URL from request body
    - Step 3: Issue a collision-free token and store the mapping (via ShareLinkService)
    - Step 4: Respond to user with the token and the share URL

    HTTP responses:
        200: Successful share link creation
            token: newly generated token
            url: public share URL (base URL + token)
        400: Bad client request
            message: indicate cause of bad request (invalid JSON or missing url)
        500: Internal server error
            message: configuration error or exhausted token space
        503: Data store unavailable
            message: could not create share link, try again
            headers:
                Retry-After: seconds to wait before retrying

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"url": "https://example.edu/course/cs101"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])
        {'token': 'aZ3kQ9', 'url': 'https://beyondsyllabus.in/share/aZ3kQ9'}
    """
    # 1- Get application's config
    try:
        app_config = load_config('create_share')
        settings = ShareSettings.from_config(app_config)
    except (ConfigurationError, KeyError, ClientError, BotoCoreError):
        logger.exception('Failed to load AppConfig for create share function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 2- Extract target URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not isinstance(target_url, str) or not target_url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    # 3- Issue token and store the share link
    try:
        service = ShareLinkService(create_share_link_dao(app_config, prefix=app_prefix()), settings)
        token, short_url = service.create(target_url)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'event': STORE_UNAVAILABLE})
        return response_503(retry_after=RETRY_AFTER_SECONDS, message=TRY_AGAIN, error_code=STORE_UNAVAILABLE)
    except TokenSpaceExhaustedError:
        logger.exception('Token space exhausted. Responding with 500.', extra={'event': TOKEN_SPACE_EXHAUSTED})
        return response_500(message=TRY_AGAIN, error_code=TOKEN_SPACE_EXHAUSTED)

    # 4- Return successful response to user
    logger.info('Share link created. Responding with 200.', extra={'token': token, 'event': SHARE_CREATED})
    return response_200({'token': token, 'url': short_url})
