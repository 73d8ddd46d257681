# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
This module covers some utility functions that operate on config values or basic objects
"""
from copy import deepcopy
from typing import List, Union

from .exceptions import InvalidConfigError


S_DROP = "__DROP__"  # this is a symbol which indicates drop the value


def update_config(base_config: dict, ext_config: Union[dict, List[dict]]):
    """
    supporting adding base config based on the ext_config

    >>> bc = {"a": "xixi"}
    >>> ec = {"b": "haha"}
    >>> new_bc = update_config(bc, ec)
    >>> print(new_bc)
    {'a': 'xixi', 'b': 'haha'}
    >>> print(bc)  # base config should not be changed
    {'a': 'xixi'}
    >>> print(update_config(bc, {"b": S_DROP}))
    {'a': 'xixi'}
    >>> print(update_config(new_bc, {"b": S_DROP}))
    {'a': 'xixi'}
    """

    base_config = deepcopy(base_config)  # in case of modifying base config

    for ec in ext_config if isinstance(ext_config, (list, tuple)) else [ext_config]:
        for key in ec:
            if key not in base_config:
                # ADD if not drop
                if ec[key] != S_DROP:
                    base_config[key] = ec[key]

            else:
                if isinstance(base_config[key], dict) and isinstance(ec[key], dict):
                    # Both of them are dict, then update it nested
                    base_config[key] = update_config(base_config[key], ec[key])
                elif ec[key] == S_DROP:
                    del base_config[key]
                else:
                    # one of then are not dict. Then replace
                    base_config[key] = ec[key]
    return base_config


def is_int(value) -> bool:
    # bool is a subclass of int but never a meaningful size
    return isinstance(value, int) and not isinstance(value, bool)


def check_positive_int(value, name: str = "capacity") -> int:
    """raise InvalidConfigError unless `value` is an int > 0"""
    if not is_int(value) or value <= 0:
        raise InvalidConfigError(f"{name} must be a positive integer, your {name} is {value!r}")
    return value


def check_non_negative_int(value, name: str) -> int:
    if not is_int(value) or value < 0:
        raise InvalidConfigError(f"{name} must be a non-negative integer, your {name} is {value!r}")
    return value


def is_valid_key(key) -> bool:
    """cache keys are non-empty strings"""
    return isinstance(key, str) and len(key) > 0
