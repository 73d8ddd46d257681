# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

# capacity used when neither the caller nor the config gives one
DEFAULT_CAPACITY = 100

# decimals kept in the reported hit rate
HIT_RATE_PRECISION = 2

# root name of every module logger
LOGGER_ROOT = "cachemanager"
