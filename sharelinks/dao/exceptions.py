"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShareLinkNotFoundError:
        Raised when a share link is unknown or has expired.

    ShareLinkAlreadyExistsError:
        Raised when attempting to insert a share link whose token is taken.

    TokenSpaceExhaustedError:
        Raised when no free token could be drawn within the attempt bound.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from sharelinks.dao.exceptions import ShareLinkNotFoundError
    >>> raise ShareLinkNotFoundError("Share link with token 'aZ3kQ9' not found or has expired.")
    Traceback (most recent call last):
        ...
    sharelinks.dao.exceptions.ShareLinkNotFoundError: Share link with token 'aZ3kQ9' not found or has expired.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShareLinkNotFoundError(DAOError):
    """Exception raised when a share link is not found (never existed or expired)."""

    pass


class ShareLinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a share link whose token already exists in the data store."""

    pass


class TokenSpaceExhaustedError(DAOError):
    """Exception raised when every drawn token collided with an existing share link.

    Indicates a capacity/configuration problem (token length too small for
    the issuance volume), not a transient condition.
    """

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
