# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
About the configs
=================

The config will be based on _default_config.
Every key can be overridden through ``cachemanager.init(**kwargs)`` or a yaml file
loaded by ``cachemanager.init_from_yaml_conf``.

"""
from __future__ import annotations

import copy
import logging

from cachemanager.constant import DEFAULT_CAPACITY, HIT_RATE_PRECISION, LOGGER_ROOT


class Config:
    def __init__(self, default_conf):
        self.__dict__["_default_config"] = copy.deepcopy(default_conf)  # avoiding conflicts with __getattr__
        self.reset()

    def __getitem__(self, key):
        return self.__dict__["_config"][key]

    def __getattr__(self, attr):
        if attr in self.__dict__["_config"]:
            return self.__dict__["_config"][attr]

        raise AttributeError(f"No such `{attr}` in self._config")

    def get(self, key, default=None):
        return self.__dict__["_config"].get(key, default)

    def __setitem__(self, key, value):
        self.__dict__["_config"][key] = value

    def __setattr__(self, attr, value):
        self.__dict__["_config"][attr] = value

    def __contains__(self, item):
        return item in self.__dict__["_config"]

    def __getstate__(self):
        return self.__dict__

    def __setstate__(self, state):
        self.__dict__.update(state)

    def __str__(self):
        return str(self.__dict__["_config"])

    def __repr__(self):
        return str(self.__dict__["_config"])

    def reset(self):
        self.__dict__["_config"] = copy.deepcopy(self._default_config)

    def update(self, *args, **kwargs):
        self.__dict__["_config"].update(*args, **kwargs)


_default_config = {
    # capacity of a cache created without an explicit one
    "cache_capacity": DEFAULT_CAPACITY,
    # decimals of stats()["hit_rate"]
    "hit_rate_precision": HIT_RATE_PRECISION,
    # This value can be reset via cachemanager.init
    "logging_level": logging.INFO,
    # Global configuration of cachemanager log
    # logging_level can control the logging level more finely
    "logging_config": {
        "version": 1,
        "formatters": {
            "logger_format": {
                "format": "[%(process)s:%(threadName)s](%(asctime)s) %(levelname)s - %(name)s - [%(filename)s:%(lineno)d] - %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": logging.DEBUG,
                "formatter": "logger_format",
            }
        },
        "loggers": {LOGGER_ROOT: {"level": logging.DEBUG, "handlers": ["console"]}},
        # To let cachemanager work with other packages, we shouldn't disable existing loggers.
        "disable_existing_loggers": False,
    },
}


class CacheConfig(Config):
    def set(self, **kwargs):
        """
        configure cachemanager based on the input parameters

        The configuration will act like a dictionary: the defaults are restored first,
        then every given key replaces the default one.

        Parameters
        ----------
        cache_capacity : int
            capacity of a cache created without an explicit one
        hit_rate_precision : int
            decimals of the reported hit rate
        logging_level : int
            level of the ``cachemanager.*`` loggers
        logging_config : dict
            ``logging.config.dictConfig`` compatible dict
        """
        from .log import set_log_with_config, get_module_logger  # pylint: disable=C0415
        from .utils import check_positive_int, check_non_negative_int  # pylint: disable=C0415

        # validate before touching anything so a bad value leaves the config as it was
        if "cache_capacity" in kwargs:
            check_positive_int(kwargs["cache_capacity"], "cache_capacity")
        if "hit_rate_precision" in kwargs:
            check_non_negative_int(kwargs["hit_rate_precision"], "hit_rate_precision")

        self.reset()

        _logging_config = kwargs.get("logging_config", self.logging_config)

        # set global config
        if _logging_config:
            set_log_with_config(_logging_config)

        logger = get_module_logger("Initialization", kwargs.get("logging_level", self.logging_level))

        for k, v in kwargs.items():
            if k not in self:
                logger.warning("Unrecognized config %s" % k)
            self[k] = v

        logger.info(f"cache_capacity: {self.cache_capacity}.")


# global config
C = CacheConfig(_default_config)
