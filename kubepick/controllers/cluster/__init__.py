"""Init file for cluster module."""

from kubepick.controllers.cluster.client import KubectlClient, classify_kubectl_error
from kubepick.controllers.cluster.parsers import PodParser, format_age

__all__ = ["KubectlClient", "PodParser", "classify_kubectl_error", "format_age"]
