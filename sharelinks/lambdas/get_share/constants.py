# Log events & error codes
MISSING_TOKEN = 'MISSING_TOKEN'
SHARE_NOT_FOUND = 'SHARE_NOT_FOUND'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
SHARE_RESOLVED = 'SHARE_RESOLVED'

# Seconds a client should wait before retrying after STORE_UNAVAILABLE
RETRY_AFTER_SECONDS = 5
