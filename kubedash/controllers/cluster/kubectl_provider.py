"""kubectl-backed cluster data provider.

Every call shells out to ``kubectl`` with JSON output and parses the
result. Calls are blocking; run them through ``asyncio.to_thread``.
"""

from __future__ import annotations

import json
import logging
import subprocess
import threading
from collections.abc import Callable, Sequence
from typing import IO, Any

from kubedash.constants.defaults import KUBECTL_PATH_DEFAULT
from kubedash.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    KUBECTL_CONFIG_TIMEOUT,
    LOG_STREAM_STOP_TIMEOUT,
)
from kubedash.controllers.cluster.provider import (
    ProviderError,
    RawObject,
    ResourceNotFoundError,
)
from kubedash.controllers.cluster.registry import resolve_kind
from kubedash.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)

_METRICS_API = "/apis/metrics.k8s.io/v1beta1"
_NOT_FOUND_TOKENS = ("(notfound)", "not found")


def summarize_kubectl_error(error: BaseException | str) -> str:
    """Extract a concise, user-facing error from kubectl output."""
    raw_message = str(error).strip()
    if not raw_message:
        return "Cluster connection check failed"

    lines = [line.strip() for line in raw_message.splitlines() if line.strip()]
    if not lines:
        return "Cluster connection check failed"

    preferred_tokens = (
        "unable to connect to the server",
        "you must be logged in",
        "context deadline exceeded",
        "timed out",
        "certificate",
        "no such host",
        "forbidden",
        "unauthorized",
        "not found",
    )

    selected_line = lines[-1]
    for line in reversed(lines):
        lower_line = line.lower()
        if line.startswith("error:") or any(
            token in lower_line for token in preferred_tokens
        ):
            selected_line = line
            break

    cleaned = selected_line.removeprefix("error:").strip()
    if len(cleaned) > 160:
        return f"{cleaned[:157].rstrip()}..."
    return cleaned or "Cluster connection check failed"


class _KubectlCommand:
    """Builds and runs kubectl command lines for one context."""

    def __init__(
        self,
        context: str | None = None,
        *,
        kubectl_path: str = KUBECTL_PATH_DEFAULT,
        kubeconfig: str | None = None,
    ) -> None:
        self.context = context
        self.kubectl_path = kubectl_path
        self.kubeconfig = kubeconfig

    def build(self, args: Sequence[str]) -> list[str]:
        cmd = [self.kubectl_path]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        return cmd

    def run(self, args: Sequence[str], timeout: float) -> str:
        """Run a kubectl command synchronously and return stdout.

        Raises:
            ResourceNotFoundError: kubectl reported the object as missing.
            ProviderError: Any other failure, including timeouts.
        """
        cmd = self.build(args)
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ProviderError(f"kubectl timed out after {timeout}s") from e
        except OSError as e:
            raise ProviderError(f"Unable to run {self.kubectl_path}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            message = summarize_kubectl_error(stderr or "kubectl command failed")
            if any(token in stderr.lower() for token in _NOT_FOUND_TOKENS):
                raise ResourceNotFoundError(message)
            raise ProviderError(message)
        return result.stdout


class KubectlContextSource:
    """Reads kubeconfig contexts through ``kubectl config``."""

    def __init__(
        self,
        *,
        kubectl_path: str = KUBECTL_PATH_DEFAULT,
        kubeconfig: str | None = None,
        timeout: float = KUBECTL_CONFIG_TIMEOUT,
    ) -> None:
        self._command = _KubectlCommand(kubectl_path=kubectl_path, kubeconfig=kubeconfig)
        self._timeout = max(1, timeout)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> KubectlContextSource:
        return cls(kubectl_path=settings.kubectl_path, kubeconfig=settings.kubeconfig or None)

    def list_contexts(self) -> list[str]:
        output = self._command.run(("config", "get-contexts", "-o", "name"), self._timeout)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def current_context(self) -> str:
        """Resolve the active context name from the local kubeconfig."""
        return self._command.run(("config", "current-context"), self._timeout).strip()


class KubectlLogStream:
    """Followed ``kubectl logs -f`` process read line by line."""

    def __init__(self, process: subprocess.Popen[str]) -> None:
        self._process = process
        self._stdout: IO[str] | None = process.stdout
        self._closed = threading.Event()

    def readline(self) -> str | None:
        if self._closed.is_set() or self._stdout is None:
            return None
        try:
            line = self._stdout.readline()
        except (OSError, ValueError):
            return None
        if not line:
            return None
        return line.rstrip("\r\n")

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        if self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=LOG_STREAM_STOP_TIMEOUT)
            except subprocess.TimeoutExpired:
                self._process.kill()
                self._process.wait()
        if self._stdout is not None:
            self._stdout.close()


class KubectlProvider:
    """ClusterDataProvider implementation that shells out to kubectl."""

    def __init__(
        self,
        context: str | None = None,
        *,
        kubectl_path: str = KUBECTL_PATH_DEFAULT,
        kubeconfig: str | None = None,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
        command_timeout: float = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        self.context = context
        self._command = _KubectlCommand(
            context, kubectl_path=kubectl_path, kubeconfig=kubeconfig
        )
        self._request_timeout = request_timeout
        self._command_timeout = command_timeout
        self._streams: list[KubectlLogStream] = []
        self._streams_lock = threading.Lock()

    @classmethod
    def factory_from_settings(
        cls, settings: AppSettings
    ) -> Callable[[str | None], KubectlProvider]:
        """Provider factory for ``ConnectionManager``.

        Settings are read on every call, so edits apply on the next connect.
        """

        def factory(context: str | None) -> KubectlProvider:
            return cls(
                context,
                kubectl_path=settings.kubectl_path,
                kubeconfig=settings.kubeconfig or None,
                request_timeout=settings.request_timeout,
                command_timeout=settings.command_timeout,
            )

        return factory

    # ------------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------------

    def _run(self, args: Sequence[str]) -> str:
        return self._command.run(
            (*args, f"--request-timeout={self._request_timeout}"),
            self._command_timeout,
        )

    def _run_json(self, args: Sequence[str]) -> Any:
        output = self._run(args)
        try:
            return json.loads(output) if output.strip() else {}
        except json.JSONDecodeError as e:
            raise ProviderError(f"Unexpected kubectl output: {e}") from e

    @staticmethod
    def _scope_args(namespaced: bool, namespace: str | None) -> list[str]:
        if not namespaced:
            return []
        return ["-n", namespace] if namespace else ["-A"]

    # ------------------------------------------------------------------
    # ClusterDataProvider
    # ------------------------------------------------------------------

    def server_version(self) -> str:
        data = self._run_json(("version", "-o", "json"))
        server = data.get("serverVersion") or {}
        if not server:
            raise ProviderError("Cluster did not report a server version")
        return f"{server.get('major', '')}.{server.get('minor', '')}"

    def server_address(self) -> str:
        data = self._command.run(
            ("config", "view", "--minify", "-o", "json"), KUBECTL_CONFIG_TIMEOUT
        )
        try:
            clusters = json.loads(data).get("clusters") or []
        except json.JSONDecodeError:
            return ""
        if not clusters:
            return ""
        return (clusters[0].get("cluster") or {}).get("server") or ""

    def close(self) -> None:
        with self._streams_lock:
            streams, self._streams = self._streams, []
        for stream in streams:
            stream.close()

    def list(
        self,
        kind: str,
        namespace: str | None = None,
        *,
        field_selector: str | None = None,
    ) -> list[RawObject]:
        resource_kind = resolve_kind(kind)
        args = ["get", resource_kind.resource, "-o", "json"]
        args.extend(self._scope_args(resource_kind.namespaced, namespace))
        if field_selector:
            args.append(f"--field-selector={field_selector}")
        data = self._run_json(args)
        return list(data.get("items") or [])

    def get(self, kind: str, name: str, namespace: str | None = None) -> RawObject:
        resource_kind = resolve_kind(kind)
        args = ["get", resource_kind.resource, name, "-o", "json"]
        if resource_kind.namespaced and namespace:
            args.extend(["-n", namespace])
        data = self._run_json(args)
        if not data:
            raise ResourceNotFoundError(f"{resource_kind.name} {name} not found")
        return data

    def delete(self, kind: str, name: str, namespace: str | None = None) -> None:
        resource_kind = resolve_kind(kind)
        args = ["delete", resource_kind.resource, name, "--wait=false"]
        if resource_kind.namespaced and namespace:
            args.extend(["-n", namespace])
        self._run(args)
        logger.info("Deleted %s %s/%s", resource_kind.name, namespace or "-", name)

    def _log_args(
        self,
        pod_name: str,
        namespace: str,
        container: str | None,
        tail_lines: int,
    ) -> list[str]:
        args = ["logs", pod_name, "-n", namespace, f"--tail={tail_lines}"]
        if container:
            args.extend(["-c", container])
        return args

    def get_logs(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = 1000,
    ) -> str:
        return self._run(self._log_args(pod_name, namespace, container, tail_lines))

    def open_log_stream(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = 100,
    ) -> KubectlLogStream:
        cmd = self._command.build(
            [*self._log_args(pod_name, namespace, container, tail_lines), "-f"]
        )
        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
            )
        except OSError as e:
            raise ProviderError(f"Unable to stream logs: {e}") from e
        stream = KubectlLogStream(process)
        with self._streams_lock:
            self._streams = [s for s in self._streams if not s._closed.is_set()]
            self._streams.append(stream)
        return stream

    def list_pod_metrics(self, namespace: str | None = None) -> list[RawObject]:
        path = (
            f"{_METRICS_API}/namespaces/{namespace}/pods"
            if namespace
            else f"{_METRICS_API}/pods"
        )
        data = self._run_json(("get", "--raw", path))
        return list(data.get("items") or [])


__all__ = [
    "KubectlContextSource",
    "KubectlLogStream",
    "KubectlProvider",
    "summarize_kubectl_error",
]
