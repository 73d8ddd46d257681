import fire

from cachemanager.cache import CacheManager
from cachemanager.cli import CacheCLI


class TestScenarios:
    def setup_method(self):
        self.cli = CacheCLI()

    def test_basic_usage(self, capsys):
        stats = self.cli.basic_usage()
        assert stats["hits"] == 1
        assert stats["size"] == 3
        assert "Alice" in capsys.readouterr().out

    def test_lru_eviction(self, capsys):
        stats = self.cli.lru_eviction()
        assert (stats["hits"], stats["misses"], stats["size"], stats["capacity"]) == (1, 0, 3, 3)
        out = capsys.readouterr().out
        assert "After eviction: {'entry-3': 'Value 3', 'entry-1': 'Value 1', 'entry-4': 'Value 4'}" in out
        assert "Size: 3/3" in out

    def test_singleton(self, capsys):
        stats = self.cli.singleton()
        assert stats["hits"] == 2
        assert "cache1 is cache2: True" in capsys.readouterr().out

    def test_api_caching(self, capsys):
        stats = self.cli.api_caching()
        assert (stats["hits"], stats["misses"], stats["hit_rate"]) == (1, 2, 33.33)
        assert "API calls: 2" in capsys.readouterr().out

    def test_error_handling(self, capsys):
        stats = self.cli.error_handling()
        assert stats["size"] == 0
        out = capsys.readouterr().out
        for name in ("InvalidKeyError", "InvalidValueError", "InvalidConfigError"):
            assert name in out

    def test_size_management(self, capsys):
        stats = self.cli.size_management()
        assert (stats["size"], stats["capacity"]) == (3, 10)
        assert "After resize to 3: ['item-3', 'item-4', 'item-5']" in capsys.readouterr().out

    def test_operations(self):
        stats = self.cli.operations()
        assert stats["size"] == 0
        assert stats["total"] == 0

    def test_all(self):
        results = self.cli.all()
        assert len(results) == 7
        assert results["lru_eviction"]["size"] == 3


def test_config_path(tmp_path):
    conf = tmp_path / "cache.yaml"
    conf.write_text("cache_capacity: 4\n")
    CacheCLI(config_path=str(conf)).singleton()
    assert CacheManager.get_instance().get_capacity() == 4


def test_fire_entry():
    result = fire.Fire(CacheCLI, command=["lru_eviction"])
    assert result["size"] == 3
