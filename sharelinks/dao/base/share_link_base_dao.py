"""Abstract base class for share link data access objects (DAOs).

This class establishes a consistent contract for all share link DAO
implementations, regardless of the underlying expiring key-value store
(e.g., Redis, an in-process dictionary).

Responsibilities:
    - Provide an interface for inserting and retrieving ShareLinkModel objects.
    - Standardize error handling across multiple data store implementations.
    - Delegate expiry of records to the data store.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from sharelinks.models import ShareLinkModel
        >>> from sharelinks.dao.redis import ShareLinkRedisDAO

        >>> dao = ShareLinkRedisDAO(...)

        >>> share_link = ShareLinkModel(
        ...     target="https://example.edu/course/cs101",
        ...     token="aZ3kQ9",
        ... )
        >>> dao.insert(share_link, ttl=604800)

        >>> retrieved = dao.get("aZ3kQ9")
        >>> print(retrieved.target)
        https://example.edu/course/cs101

        >>> print(dao.get("doesnotexist"))
        None
"""

from abc import ABC, abstractmethod

from sharelinks.models import ShareLinkModel


class ShareLinkBaseDAO(ABC):
    """Interface for share link data access objects (DAOs).

    Methods:
        insert(share_link: ShareLinkModel, ttl: int, **kwargs) -> ShareLinkBaseDAO:
            Insert a new share link which expires after `ttl` seconds.
            Raises ShareLinkAlreadyExistsError if the token is already taken.
            Raises DataStoreError on connection or write failure.

        get(token: str, **kwargs) -> ShareLinkModel | None:
            Retrieve a share link by token.
            Returns None if the token is unknown or expired.
            Raises DataStoreError on connection or read failure.

    NOTE:
        - Records expire automatically. The DAO does not provide an
          interface to update or delete entries.
        - insert() must be atomic per token (set-if-absent): of two
          concurrent inserts for the same token exactly one succeeds.
    """

    @abstractmethod
    def insert(self, share_link: ShareLinkModel, ttl: int, **kwargs) -> 'ShareLinkBaseDAO':
        """Insert a new share link into the data store.

        Args:
            share_link (ShareLinkModel):
                The share link to be inserted.

            ttl (int):
                Lifetime of the record in seconds.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShareLinkBaseDAO: self (for method chaining)

        Raises:
            ShareLinkAlreadyExistsError:
                If a live share link with the same token already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, token: str, **kwargs) -> ShareLinkModel | None:
        """Retrieve a share link from the data store by its token.

        Args:
            token (str):
                The token of the share link to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShareLinkModel | None: The share link if found and not expired, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
