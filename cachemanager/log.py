# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


import logging
from typing import Optional, Text, Dict, Any
from logging import config as logging_config
from time import time
from contextlib import contextmanager

from .config import C
from .constant import LOGGER_ROOT


class MetaLogger(type):
    def __new__(mcs, name, bases, attrs):
        wrapper_dict = logging.Logger.__dict__.copy()
        for key in wrapper_dict:
            if key not in attrs and key != "__reduce__":
                attrs[key] = wrapper_dict[key]
        return type.__new__(mcs, name, bases, attrs)


class CacheLogger(metaclass=MetaLogger):
    """
    Customized logger for cachemanager.
    """

    def __init__(self, module_name):
        self.module_name = module_name
        # this feature name conflicts with the attribute with Logger
        # rename it to avoid some corner cases that result in comparing `str` and `int`
        self.__level = 0

    @property
    def logger(self):
        logger = logging.getLogger(self.module_name)
        logger.setLevel(self.__level)
        return logger

    def setLevel(self, level):
        self.__level = level

    def __getattr__(self, name):
        # During unpickling, python will call __getattr__. Use this line to avoid maximum recursion error.
        if name in {"__setstate__"}:
            raise AttributeError
        return self.logger.__getattribute__(name)


class _CacheLoggerManager:
    def __init__(self):
        self._loggers = {}

    def setLevel(self, level):
        for logger in self._loggers.values():
            logger.setLevel(level)

    def __call__(self, module_name, level: Optional[int] = None) -> CacheLogger:
        """
        Get a logger for a specific module.

        :param module_name: str
            Logic module name.
        :param level: int
        :return: Logger
            Logger object.
        """
        if level is None:
            level = C.logging_level

        if not module_name.startswith(f"{LOGGER_ROOT}."):
            # Add a prefix of cachemanager. when the requested ``module_name`` doesn't start with ``cachemanager.``.
            module_name = "{}.{}".format(LOGGER_ROOT, module_name)

        # Get logger.
        module_logger = self._loggers.setdefault(module_name, CacheLogger(module_name))
        module_logger.setLevel(level)
        return module_logger


get_module_logger = _CacheLoggerManager()


class TimeInspector:

    timer_logger = get_module_logger("timer", level=logging.INFO)

    time_marks = []

    @classmethod
    def set_time_mark(cls):
        """
        Set a time mark with current time, and this time mark will push into a stack.
        :return: float
            A timestamp for current time.
        """
        _time = time()
        cls.time_marks.append(_time)
        return _time

    @classmethod
    def log_cost_time(cls, info="Done"):
        """
        Get last time mark from stack, calculate time diff with current time, and log time diff and info.
        :param info: str
            Info that will be logged into stdout.
        """
        cost_time = time() - cls.time_marks.pop()
        cls.timer_logger.info("Time cost: {0:.3f}s | {1}".format(cost_time, info))
        return cost_time

    @classmethod
    @contextmanager
    def logt(cls, name="", show_start=False):
        """logt.
        Log the time of the inside code

        Parameters
        ----------
        name :
            name
        show_start :
            show_start
        """
        if show_start:
            cls.timer_logger.info(f"{name} Begin")
        cls.set_time_mark()
        try:
            yield None
        finally:
            cls.log_cost_time(info=f"{name} Done")


def set_log_with_config(log_config: Dict[Text, Any]):
    """set log with config

    :param log_config:
    :return:
    """
    logging_config.dictConfig(log_config)


def set_global_logger_level(level: int, return_orig_handler_level: bool = False):
    """set cachemanager.xxx logger handlers level

    Parameters
    ----------
    level: int
        logger level

    return_orig_handler_level: bool
        return origin handler level map

    Examples
    ---------

        .. code-block:: python

            import cachemanager
            import logging
            from cachemanager.log import get_module_logger, set_global_logger_level
            cachemanager.init()

            tmp_logger_01 = get_module_logger("tmp_logger_01", level=logging.INFO)
            tmp_logger_01.info("1. tmp_logger_01 info show")

            global_level = logging.WARNING + 1
            set_global_logger_level(global_level)
            tmp_logger_01.info("2. tmp_logger_01 info do not show")

    """
    _handler_level_map = {}
    root_logger = logging.root.manager.loggerDict.get(LOGGER_ROOT, None)
    if isinstance(root_logger, logging.Logger):
        for _handler in root_logger.handlers:
            _handler_level_map[_handler] = _handler.level
            _handler.level = level
    return _handler_level_map if return_orig_handler_level else None


@contextmanager
def set_global_logger_level_cm(level: int):
    """set cachemanager.xxx logger handlers level to use contextmanager

    Parameters
    ----------
    level: int
        logger level
    """
    _handler_level_map = set_global_logger_level(level, return_orig_handler_level=True)
    try:
        yield
    finally:
        for _handler, _level in _handler_level_map.items():
            _handler.level = _level
