"""Core row and result models."""

from kubepick.models.core.client_result import ClientResult
from kubepick.models.core.pod_info import NamespaceInfo, PodContainerInfo

__all__ = ["ClientResult", "NamespaceInfo", "PodContainerInfo"]
