# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


# Base exception class
class CacheManagerException(Exception):
    pass


class InvalidKeyError(CacheManagerException, TypeError):
    """Error type for an empty or non-string cache key"""


class InvalidValueError(CacheManagerException, ValueError):
    """Error type for storing the absence marker (None) as a value"""


class InvalidConfigError(CacheManagerException, ValueError):
    """Error type for a non-positive or non-integer capacity, or a bad config value"""
