import pytest

from cachemanager.cache import CacheManager
from cachemanager.config import C


@pytest.fixture(autouse=True)
def reset_cache_state():
    """every test starts with default config and no shared cache"""
    C.reset()
    CacheManager.reset_instance()
    yield
    CacheManager.reset_instance()
    C.reset()
