"""
Cache Module: bounded read-through result cache.
"""

from media_vectors.cache.result_cache import ResultCache

__all__ = ["ResultCache"]
