"""Pod parser - flattens kubectl pod items into per-container rows."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from kubepick.constants.values import AGE_UNKNOWN, STATUS_UNKNOWN
from kubepick.models.core.pod_info import NamespaceInfo, PodContainerInfo

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_age(start_time: str | None, now: datetime | None = None) -> str:
    """Format an RFC3339 timestamp as a kubectl-style age (``35m``, ``2h``, ``3d``).

    Returns ``?`` for a missing or malformed timestamp and ``0s`` for one in
    the future.
    """
    if not start_time:
        return AGE_UNKNOWN
    try:
        started = datetime.strptime(start_time, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return AGE_UNKNOWN

    current = now or datetime.now(timezone.utc)
    diff = int((current - started).total_seconds())
    if diff < 0:
        return "0s"
    if diff < 60:
        return f"{diff}s"
    if diff < 3600:
        return f"{diff // 60}m"
    if diff < 86400:
        return f"{diff // 3600}h"
    return f"{diff // 86400}d"


class PodParser:
    """Parses pod items into ``PodContainerInfo`` rows."""

    @staticmethod
    def _workload_name(metadata: dict[str, Any], container_name: str) -> str:
        # Deployment pods are owned by a ReplicaSet named "<deployment>-<hash>".
        for owner in metadata.get("ownerReferences") or []:
            if owner.get("kind") == "ReplicaSet" and "-" in owner.get("name", ""):
                return owner["name"].rsplit("-", 1)[0]
        return container_name

    def parse_pod(self, pod: dict[str, Any], now: datetime | None = None) -> list[PodContainerInfo]:
        metadata = pod.get("metadata") or {}
        status = pod.get("status") or {}
        spec = pod.get("spec") or {}

        pod_name = metadata.get("name", STATUS_UNKNOWN)
        phase = status.get("phase") or STATUS_UNKNOWN
        statuses = {
            cs.get("name"): cs for cs in status.get("containerStatuses") or [] if isinstance(cs, dict)
        }

        rows: list[PodContainerInfo] = []
        for container in spec.get("containers") or []:
            name = container.get("name", "")
            container_status = statuses.get(name) or {}
            running = (container_status.get("state") or {}).get("running") or {}
            rows.append(
                PodContainerInfo(
                    pod_name=pod_name,
                    container_name=name,
                    namespace=metadata.get("namespace"),
                    status=phase,
                    image=container.get("image", ""),
                    age=format_age(running.get("startedAt"), now),
                    restarts=int(container_status.get("restartCount") or 0),
                    workload=self._workload_name(metadata, name),
                )
            )
        return rows

    def parse_pods(
        self, items: list[dict[str, Any]], now: datetime | None = None
    ) -> list[PodContainerInfo]:
        rows: list[PodContainerInfo] = []
        for pod in items:
            rows.extend(self.parse_pod(pod, now))
        return rows

    @staticmethod
    def parse_namespaces(items: list[dict[str, Any]]) -> list[NamespaceInfo]:
        namespaces = [
            NamespaceInfo(
                name=(item.get("metadata") or {}).get("name", ""),
                status=(item.get("status") or {}).get("phase") or STATUS_UNKNOWN,
            )
            for item in items
        ]
        return sorted((ns for ns in namespaces if ns.name), key=lambda ns: ns.name)


__all__ = ["PodParser", "format_age"]
