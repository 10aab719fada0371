"""
Stores Module

In-memory caches filled by explicit refresh operations and injected into the
eligibility engine.
"""

from .skills_cache_store import CacheKey, SkillsCacheStore, WorldSkillsCache, WorldSkillsEntry

__all__ = [
    'CacheKey',
    'SkillsCacheStore',
    'WorldSkillsCache',
    'WorldSkillsEntry',
]
