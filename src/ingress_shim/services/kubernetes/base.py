"""Base manager for Kubernetes resource managers.

Provides shared infrastructure for all managers: client access, namespace
resolution, retrying reads and error translation.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

import structlog

if TYPE_CHECKING:
    from ingress_shim.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()

T = TypeVar("T")


class K8sBaseManager:
    """Base class for Kubernetes resource managers.

    Subclasses set ``_entity_name`` for structured log context.

    Example:
        >>> class IngressManager(K8sBaseManager):
        ...     _entity_name = "ingress"
    """

    _entity_name: str = ""

    def __init__(self, client: KubernetesClient) -> None:
        """Initialize the manager.

        Args:
            client: Kubernetes API client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    def _resolve_namespace(self, namespace: str | None) -> str:
        """Resolve namespace, falling back to the client default."""
        return namespace or self._client.default_namespace

    def _read(
        self,
        call: Callable[..., T],
        *args: Any,
        resource_type: str,
        resource_name: str | None = None,
        namespace: str | None = None,
        **kwargs: Any,
    ) -> T:
        """Run a read call, retrying on connection errors.

        Every attempt is bounded by the client request timeout.

        API exceptions are translated before the retry policy sees them, so
        only :class:`KubernetesConnectionError` triggers another attempt.
        """

        @self._client.make_retry_decorator()
        def _attempt() -> T:
            try:
                return call(*args, _request_timeout=self._client.timeout, **kwargs)
            except Exception as e:
                self._handle_api_error(e, resource_type, resource_name, namespace)

        return _attempt()

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Translate a Kubernetes API exception and re-raise.

        Raises:
            KubernetesError: Always raises an appropriate subclass.
        """
        raise self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
