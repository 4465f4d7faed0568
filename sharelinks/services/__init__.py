from sharelinks.services.share_link_service import ShareLinkService


__all__ = [
    'ShareLinkService',
]
