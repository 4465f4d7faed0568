from sharelinks.dao.memory.share_link_memory_dao import ShareLinkMemoryDAO


__all__ = [
    'ShareLinkMemoryDAO',
]
