"""kubectl-backed cluster client.

All request/response calls return a ``ClientResult`` and never raise cluster
errors: failures are classified here, once, into the ``ClusterError``
hierarchy. Blocking kubectl invocations run in a worker thread so the event
loop stays responsive.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shlex
import subprocess
import time
from typing import Any

from kubepick.constants.defaults import DEFAULT_NAMESPACE, LOG_TAIL_LINES_DEFAULT
from kubepick.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    TERMINAL_COMMAND_TIMEOUT,
)
from kubepick.constants.values import SCOPE_ALL, SCOPE_CURRENT
from kubepick.controllers.base.base_controller import BaseController
from kubepick.controllers.session.stream_session import LogTarget
from kubepick.exceptions import (
    AuthError,
    ClusterError,
    ClusterTimeoutError,
    CommandError,
    ConnectivityError,
    NotFoundError,
    ParseError,
    SpawnFailedError,
)
from kubepick.models.core.client_result import ClientResult

logger = logging.getLogger(__name__)


def classify_kubectl_error(stderr: str) -> ClusterError:
    """Map kubectl stderr text onto the cluster error hierarchy."""
    text = (stderr or "").strip()
    lowered = text.lower()
    if "connection refused" in lowered or "no such host" in lowered:
        return ConnectivityError("Cannot connect to Kubernetes cluster", text)
    if ("context" in lowered and "not found" in lowered) or "current-context" in lowered:
        return ConnectivityError(
            "No Kubernetes context configured. Run 'kubectl config get-contexts'", text
        )
    if "forbidden" in lowered:
        return AuthError("Insufficient permissions to access this resource", text)
    if "not found" in lowered or "notfound" in lowered:
        return NotFoundError("Resource not found in cluster", text)
    if "timed out" in lowered or "timeout" in lowered:
        return ClusterTimeoutError("Request timed out. Cluster may be slow or unreachable", text)
    return CommandError(text or "kubectl command failed", text)


def _namespace_args(namespace: str | None) -> list[str]:
    if namespace and namespace != SCOPE_CURRENT:
        return ["-n", namespace]
    return []


class KubectlClient(BaseController):
    """Cluster client issuing kubectl commands."""

    def __init__(
        self,
        context: str | None = None,
        kubectl: str = "kubectl",
        command_timeout: int = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        self.context = context
        self.kubectl = kubectl
        self.command_timeout = command_timeout

    def build_command(self, args: list[str] | tuple[str, ...]) -> list[str]:
        cmd = [self.kubectl]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        return cmd

    # =========================================================================
    # Command execution
    # =========================================================================

    def _run_kubectl_sync(self, args: tuple[str, ...], timeout: float | None = None) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target).

        Raises:
            ClusterError: Classified failure.
        """
        cmd = self.build_command(args)
        logger.debug("Running command: %s", shlex.join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout if timeout is not None else self.command_timeout,
            )
        except OSError as exc:
            raise ConnectivityError("kubectl not found in PATH or not accessible", str(exc)) from exc
        except subprocess.TimeoutExpired as exc:
            raise ClusterTimeoutError(
                "Request timed out. Cluster may be slow or unreachable", str(exc)
            ) from exc
        if result.returncode != 0:
            raise classify_kubectl_error(result.stderr)
        return result.stdout

    async def _run(self, *args: str, timeout: float | None = None) -> ClientResult[str]:
        start = time.monotonic()
        try:
            output = await asyncio.to_thread(self._run_kubectl_sync, args, timeout)
        except ClusterError as exc:
            duration_ms = (time.monotonic() - start) * 1000
            logger.warning("kubectl %s failed: %s", " ".join(args), exc.message)
            return ClientResult.failure(exc, duration_ms)
        return ClientResult(data=output, duration_ms=(time.monotonic() - start) * 1000)

    @staticmethod
    def _decode_items(output: str, what: str) -> list[dict[str, Any]]:
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Failed to parse {what} output", str(exc)) from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            raise ParseError(f"Failed to parse {what} output", "missing 'items'")
        return payload["items"]

    async def _run_items(self, what: str, *args: str) -> ClientResult[list[dict[str, Any]]]:
        result = await self._run(*args)
        if result.error is not None:
            return ClientResult.failure(result.error, result.duration_ms)
        try:
            items = self._decode_items(result.data or "", what)
        except ParseError as exc:
            return ClientResult.failure(exc, result.duration_ms)
        return ClientResult(data=items, duration_ms=result.duration_ms)

    # =========================================================================
    # Queries
    # =========================================================================

    async def check_connection(self) -> ClientResult[bool]:
        """Check that kubectl is installed and runnable."""
        result = await self._run("version", "--client", "-o", "json", timeout=CLUSTER_CHECK_TIMEOUT)
        if result.error is not None:
            return ClientResult(data=False, error=result.error, duration_ms=result.duration_ms)
        return ClientResult(data=True, duration_ms=result.duration_ms)

    async def list_pods(self, scope_key: str = SCOPE_CURRENT) -> ClientResult[list[dict[str, Any]]]:
        """List pods for ``current``, ``all`` or a literal namespace."""
        if scope_key == SCOPE_ALL:
            scope_args = ["--all-namespaces"]
        else:
            scope_args = _namespace_args(scope_key)
        return await self._run_items(
            "pods",
            "get",
            "pods",
            *scope_args,
            "-o",
            "json",
            f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
        )

    async def list_namespaces(self) -> ClientResult[list[dict[str, Any]]]:
        return await self._run_items(
            "namespaces",
            "get",
            "namespaces",
            "-o",
            "json",
            f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
        )

    async def get_current_namespace(self) -> ClientResult[str]:
        """Namespace of the active context; ``default`` when unset or on error."""
        result = await self._run("config", "view", "--minify", "-o", "json")
        if result.error is not None:
            return ClientResult(
                data=DEFAULT_NAMESPACE, error=result.error, duration_ms=result.duration_ms
            )
        try:
            payload = json.loads(result.data or "")
        except json.JSONDecodeError as exc:
            return ClientResult(
                data=DEFAULT_NAMESPACE,
                error=ParseError("Failed to parse kubectl config", str(exc)),
                duration_ms=result.duration_ms,
            )
        contexts = payload.get("contexts") if isinstance(payload, dict) else None
        namespace = None
        if contexts and isinstance(contexts[0], dict):
            namespace = (contexts[0].get("context") or {}).get("namespace")
        return ClientResult(data=namespace or DEFAULT_NAMESPACE, duration_ms=result.duration_ms)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def restart_workload(self, name: str, namespace: str | None = None) -> ClientResult[bool]:
        """``kubectl rollout restart deployment <name>``."""
        result = await self._run("rollout", "restart", "deployment", name, *_namespace_args(namespace))
        if result.error is not None:
            return ClientResult(data=False, error=result.error, duration_ms=result.duration_ms)
        logger.info("Deployment %s restarted", name)
        return ClientResult(data=True, duration_ms=result.duration_ms)

    async def set_image(
        self,
        workload: str,
        container: str,
        image: str,
        namespace: str | None = None,
    ) -> ClientResult[bool]:
        """``kubectl set image deployment/<workload> <container>=<image>``."""
        result = await self._run(
            "set",
            "image",
            f"deployment/{workload}",
            f"{container}={image}",
            *_namespace_args(namespace),
        )
        if result.error is not None:
            return ClientResult(data=False, error=result.error, duration_ms=result.duration_ms)
        logger.info("Deployment %s image set to %s", workload, image)
        return ClientResult(data=True, duration_ms=result.duration_ms)

    # =========================================================================
    # Log streams
    # =========================================================================

    def log_command(self, target: LogTarget, tail_lines: int = LOG_TAIL_LINES_DEFAULT) -> list[str]:
        args = ["logs", "-f", f"--tail={tail_lines}", target.pod]
        args.extend(_namespace_args(target.namespace))
        if target.container:
            args.extend(["-c", target.container])
        return self.build_command(args)

    async def spawn_log_stream(
        self,
        target: LogTarget,
        tail_lines: int = LOG_TAIL_LINES_DEFAULT,
    ) -> asyncio.subprocess.Process:
        """Start ``kubectl logs -f`` with piped output.

        Raises:
            SpawnFailedError: If the subprocess cannot be started.
        """
        cmd = self.log_command(target, tail_lines)
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise SpawnFailedError(cmd, exc) from exc
        logger.debug("Spawned %s as pid %s", shlex.join(cmd), process.pid)
        return process

    async def open_in_terminal(
        self,
        target: LogTarget,
        split_cmd: str,
        tail_lines: int = LOG_TAIL_LINES_DEFAULT,
    ) -> ClientResult[bool]:
        """Follow logs in an external terminal pane (e.g. a tmux split)."""
        command = split_cmd % shlex.join(self.log_command(target, tail_lines))
        start = time.monotonic()
        try:
            result = await asyncio.to_thread(
                subprocess.run,
                command,
                shell=True,
                capture_output=True,
                text=True,
                timeout=TERMINAL_COMMAND_TIMEOUT,
            )
        except subprocess.TimeoutExpired as exc:
            return ClientResult.failure(
                ClusterTimeoutError("Terminal command timed out", str(exc)),
                (time.monotonic() - start) * 1000,
            )
        except OSError as exc:
            return ClientResult.failure(
                CommandError(f"Command failed: {command}", str(exc)),
                (time.monotonic() - start) * 1000,
            )
        duration_ms = (time.monotonic() - start) * 1000
        if result.returncode != 0:
            error = CommandError(
                f"Command failed: {command}", (result.stderr or "").strip()
            )
            return ClientResult(data=False, error=error, duration_ms=duration_ms)
        return ClientResult(data=True, duration_ms=duration_ms)


__all__ = [
    "KubectlClient",
    "classify_kubectl_error",
]
