"""Pod and namespace row models."""

from pydantic import BaseModel

from kubepick.constants.values import AGE_UNKNOWN, STATUS_UNKNOWN


class PodContainerInfo(BaseModel):
    """One picker row: a container inside a pod."""

    pod_name: str
    container_name: str
    namespace: str | None = None
    status: str = STATUS_UNKNOWN
    image: str = ""
    age: str = AGE_UNKNOWN
    restarts: int = 0
    workload: str = ""

    @property
    def key(self) -> str:
        return f"{self.namespace or ''}/{self.pod_name}/{self.container_name}"


class NamespaceInfo(BaseModel):
    """One namespace entry."""

    name: str
    status: str = STATUS_UNKNOWN
