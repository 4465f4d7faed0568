# Log events & error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URL = 'MISSING_URL'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
TOKEN_SPACE_EXHAUSTED = 'TOKEN_SPACE_EXHAUSTED'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
SHARE_CREATED = 'SHARE_CREATED'

# Seconds a client should wait before retrying after STORE_UNAVAILABLE
RETRY_AFTER_SECONDS = 5
