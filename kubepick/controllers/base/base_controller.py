"""Base controller with result-value patterns for kubepick.

Cluster calls never raise across this boundary: they return a
``ClientResult`` carrying either data or a classified ``ClusterError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from kubepick.models.core.client_result import ClientResult


class BaseController(ABC):
    """Base class for cluster-facing controllers.

    Implementations wrap a concrete backend such as kubectl; tests
    substitute an in-memory fake.
    """

    @abstractmethod
    async def check_connection(self) -> ClientResult[bool]:
        """Check if the data source is available."""
        ...

    @abstractmethod
    async def list_pods(self, scope_key: str) -> ClientResult[list[dict[str, Any]]]:
        """List pod items for a scope key (``current``, ``all`` or a namespace)."""
        ...

    @abstractmethod
    async def list_namespaces(self) -> ClientResult[list[dict[str, Any]]]:
        """List namespace items."""
        ...
