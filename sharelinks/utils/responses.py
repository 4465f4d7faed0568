"""API Gateway (Lambda proxy) response builders shared by the Lambda handlers.

Every builder returns a JSON-serialized body of the form:

    {"message": "...", "errorCode": "..."}   # errors
    {...payload...}                          # successes

The allowed CORS origin is read from `CORS_ORIGIN` on every response
(any origin when unset).
"""

import os
import json
from typing import Any

from sharelinks.constants import ENV
from sharelinks.types import LambdaResponse


def cors_headers() -> dict[str, str]:
    return {
        'Access-Control-Allow-Origin': os.getenv(ENV.App.CORS_ORIGIN) or '*',
        'Access-Control-Allow-Headers': 'Content-Type',
        'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
    }


def _error(status_code: int, base: str, message: str | None, error_code: str | None, headers: dict | None = None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **cors_headers(), **(headers or {})},
        'body': json.dumps(body),
    }


def response_200(payload: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json', **cors_headers()},
        'body': json.dumps(payload),
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)


def response_503(*, retry_after: int, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(503, 'Service Unavailable', message, error_code, headers={'Retry-After': str(retry_after)})
