"""Shared CLI constants."""

EXIT_SUCCESS = 0
EXIT_DECLINED = 1
# configuration and connection problems share the "nothing was done" code
EXIT_CONFIG = 1
EXIT_ERROR = 2
