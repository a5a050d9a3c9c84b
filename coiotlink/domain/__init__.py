"""
This package defines the core domain objects of coiotlink: the decoded
response wrapper and the per-device descriptor cache.
"""
from coiotlink.domain.cache import DescriptorCache
from coiotlink.domain.response import STATUS_PUSH_CODE, Response

__all__ = ["DescriptorCache", "Response", "STATUS_PUSH_CODE"]
