"""Timeouts used when shelling out to kubectl."""

from typing import Final

# Passed to kubectl as --request-timeout
CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Wall-clock limits for the kubectl subprocess itself, in seconds.
# The command limit stays above the request timeout.
KUBECTL_COMMAND_TIMEOUT: Final = 45
TERMINAL_COMMAND_TIMEOUT: Final = 10
CLUSTER_CHECK_TIMEOUT: Final = 12.0

__all__ = [
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "TERMINAL_COMMAND_TIMEOUT",
]
