"""Connection manager - owns the single live cluster data provider."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from kubedash.constants.enums import ConnectionStatus
from kubedash.controllers.base.base_controller import ActionResult
from kubedash.controllers.cluster.kubectl_provider import (
    KubectlContextSource,
    KubectlProvider,
    summarize_kubectl_error,
)
from kubedash.controllers.cluster.provider import (
    ClusterDataProvider,
    ConnectError,
    ContextSource,
    NotConnectedError,
)
from kubedash.models.cache.data_cache import DataCache
from kubedash.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str | None], ClusterDataProvider]


class ConnectionManager:
    """Connects to one kubeconfig context at a time.

    A provider only becomes visible through ``provider`` after its version
    round trip succeeded. Connect requests are serialized; a request issued
    while another is running waits for it and then replaces its result.
    """

    def __init__(
        self,
        provider_factory: ProviderFactory,
        context_source: ContextSource | None = None,
        *,
        cache: DataCache | None = None,
    ) -> None:
        self._provider_factory = provider_factory
        self._context_source = context_source
        self._cache = cache
        self._provider: ClusterDataProvider | None = None
        self._lock = asyncio.Lock()
        self.status = ConnectionStatus.DISCONNECTED
        self.status_message = ""
        self.active_context = ""
        self.server_version = ""
        self._server_address = ""

    @classmethod
    def from_settings(
        cls, settings: AppSettings, *, cache: DataCache | None = None
    ) -> ConnectionManager:
        """kubectl-backed manager using the cluster access settings."""
        return cls(
            KubectlProvider.factory_from_settings(settings),
            KubectlContextSource.from_settings(settings),
            cache=cache,
        )

    # ------------------------------------------------------------------
    # kubeconfig metadata
    # ------------------------------------------------------------------

    def list_contexts(self) -> list[str]:
        if self._context_source is None:
            return []
        try:
            return self._context_source.list_contexts()
        except Exception as e:
            logger.debug("Could not list kubeconfig contexts: %s", e)
            return []

    def current_context(self) -> str:
        if self._context_source is None:
            return ""
        try:
            return self._context_source.current_context()
        except Exception as e:
            logger.debug("Could not resolve current context: %s", e)
            return ""

    # ------------------------------------------------------------------
    # provider lifecycle
    # ------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._provider is not None

    @property
    def provider(self) -> ClusterDataProvider:
        if self._provider is None:
            raise NotConnectedError("Not connected to a cluster")
        return self._provider

    def active_server_address(self) -> str:
        return self._server_address if self._provider is not None else ""

    def _teardown(self) -> None:
        provider, self._provider = self._provider, None
        self._server_address = ""
        self.server_version = ""
        if provider is None:
            return
        try:
            provider.close()
        except Exception as e:
            logger.debug("Error closing provider for %s: %s", self.active_context, e)

    def disconnect(self) -> None:
        """Close the active provider; safe to call repeatedly."""
        self._teardown()
        self.status = ConnectionStatus.DISCONNECTED
        self.status_message = ""

    def _open(self, context: str | None) -> tuple[ClusterDataProvider, str, str]:
        """Build a provider and confirm reachability (runs in a worker thread)."""
        try:
            provider = self._provider_factory(context)
        except Exception as e:
            raise ConnectError(summarize_kubectl_error(e)) from e
        try:
            version = provider.server_version()
            address = provider.server_address()
        except Exception as e:
            provider.close()
            raise ConnectError(summarize_kubectl_error(e)) from e
        return provider, version, address

    async def connect(self, context: str | None = None) -> ActionResult:
        """Switch to ``context`` (or the kubeconfig default).

        Returns:
            ActionResult with the server version as data on success, or a
            single summarized message on failure.
        """
        started = time.monotonic()
        async with self._lock:
            self._teardown()
            if self._cache is not None:
                await self._cache.clear()
            target = context
            if not target:
                target = await asyncio.to_thread(self.current_context) or None
            self.active_context = target or ""
            self.status = ConnectionStatus.CONNECTING
            self.status_message = f"Connecting to {self.active_context or 'default context'}"
            logger.info("Connecting to context %s", self.active_context or "<default>")
            try:
                provider, version, address = await asyncio.to_thread(self._open, target)
            except ConnectError as e:
                message = str(e)
                self.status = ConnectionStatus.FAILED
                self.status_message = message
                logger.warning("Connect to %s failed: %s", self.active_context, message)
                return ActionResult.failed(message, started=started)

            self._provider = provider
            self._server_address = address
            self.server_version = version
            self.status = ConnectionStatus.CONNECTED
            self.status_message = ""
            logger.info("Connected to %s (server %s)", self.active_context, version)
            return ActionResult.ok(version, started=started)
