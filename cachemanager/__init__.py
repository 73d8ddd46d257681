# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
from pathlib import Path

__version__ = "0.1.0"
import yaml
from .log import get_module_logger, set_global_logger_level
from .cache import CacheManager, LRUCacheUnit, read_through
from .utils import update_config
from .utils.exceptions import CacheManagerException, InvalidConfigError, InvalidKeyError, InvalidValueError


# init cachemanager
def init(**kwargs):
    """

    Parameters
    ----------
    **kwargs :
        clear_cache: bool
            the default value is True;
            Clear the shared cache instance (if it already exists) so that it is rebuilt
            with the new configuration on the next `CacheManager.get_instance()`.
        any other key
            a config key of `cachemanager.config.C`, e.g. cache_capacity, logging_level.

    """
    from .config import C  # pylint: disable=C0415

    clear_cache = kwargs.pop("clear_cache", True)
    C.set(**kwargs)
    get_module_logger.setLevel(C.logging_level)

    logger = get_module_logger("Initialization")
    if clear_cache and CacheManager.has_instance():
        CacheManager.reset_instance()
        logger.info("shared cache is reset.")

    logger.info("cachemanager successfully initialized based on config.")


def init_from_yaml_conf(conf_path, **kwargs):
    """init_from_yaml_conf

    User can specify a base config file in the yaml file by adding "BASE_CONFIG_PATH".
    The base config is loaded first, and the fields of the given file update it.

    For examples:

        BASE_CONFIG_PATH: "base_cache.yaml"
        cache_capacity: 500

    :param conf_path: A path to the cachemanager config in yml format
    """
    logger = get_module_logger("Initialization")

    if conf_path is None:
        config = {}
    else:
        with open(conf_path) as f:
            config = yaml.safe_load(f) or {}

    base_config_path = config.pop("BASE_CONFIG_PATH", None)
    if base_config_path:
        logger.info(f"Use BASE_CONFIG_PATH: {base_config_path}")
        base_config_path = Path(base_config_path)

        # it will find config file in absolute path and relative path
        if not base_config_path.is_absolute() and not base_config_path.exists():
            base_config_path = Path(conf_path).absolute().parent / base_config_path
        if not base_config_path.exists():
            raise FileNotFoundError(f"Can't find the BASE_CONFIG file: {base_config_path}")

        with open(base_config_path) as f:
            base_config = yaml.safe_load(f) or {}
        base_config.pop("BASE_CONFIG_PATH", None)
        config = update_config(base_config, config)

    config.update(kwargs)
    init(**config)


__all__ = [
    "__version__",
    "init",
    "init_from_yaml_conf",
    "CacheManager",
    "LRUCacheUnit",
    "read_through",
    "CacheManagerException",
    "InvalidConfigError",
    "InvalidKeyError",
    "InvalidValueError",
    "set_global_logger_level",
]
