"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client with config loading, lazy API
group initialization, retry for transient connection failures, and
translation of ``ApiException`` into :mod:`.exceptions`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ingress_shim.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import CoreV1Api, CustomObjectsApi, NetworkingV1Api

    from ingress_shim.config import ShimConfig

logger = structlog.get_logger()


class KubernetesClient:
    """Kubernetes API client for the certificate sync.

    Example:
        ```python
        from ingress_shim.config import load_config
        from ingress_shim.integrations.kubernetes import KubernetesClient

        with KubernetesClient(load_config()) as client:
            ingresses = client.networking_v1.list_namespaced_ingress("default")
        ```
    """

    def __init__(self, config: ShimConfig) -> None:
        """Load kubeconfig (or in-cluster config) for the configured context.

        Args:
            config: Controller configuration.

        Raises:
            KubernetesConnectionError: If no configuration can be loaded.
        """
        self._config = config
        self._retries = max(config.retry_attempts, 1)
        self._current_context: str | None = None

        self._core_v1: CoreV1Api | None = None
        self._networking_v1: NetworkingV1Api | None = None
        self._custom_objects: CustomObjectsApi | None = None

        self._load_config()

        logger.info(
            "kubernetes_client_initialized",
            context=self._current_context,
            namespace=config.namespace or "*",
        )

    def _load_config(self) -> None:
        """Load Kubernetes configuration from kubeconfig or in-cluster."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        cluster = self._config.cluster
        context = cluster.context or None
        try:
            config.load_kube_config(config_file=cluster.kubeconfig, context=context)
            self._current_context = context
            logger.debug("loaded_kubeconfig", context=context, kubeconfig=cluster.kubeconfig)
        except ConfigException:
            try:
                config.load_incluster_config()
                self._current_context = "in-cluster"
                logger.debug("loaded_incluster_config")
            except ConfigException as e:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=e,
                ) from e

        self._core_v1 = None
        self._networking_v1 = None
        self._custom_objects = None

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    @property
    def core_v1(self) -> CoreV1Api:
        """CoreV1Api instance (events)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api()
        return self._core_v1

    @property
    def networking_v1(self) -> NetworkingV1Api:
        """NetworkingV1Api instance (ingresses)."""
        if self._networking_v1 is None:
            from kubernetes.client import NetworkingV1Api

            self._networking_v1 = NetworkingV1Api()
        return self._networking_v1

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """CustomObjectsApi instance (cert-manager CRDs)."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi()
        return self._custom_objects

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes ApiException to a custom exception.

        Args:
            e: The original exception.
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException

        if isinstance(e, KubernetesError):
            return e

        if isinstance(e, OSError):
            return KubernetesConnectionError(message=str(e) or type(e).__name__, original_error=e)

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status == 409:
            return KubernetesConflictError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (502, 503, 504):
            return KubernetesConnectionError(
                message=e.reason or f"API server unavailable: {status}",
                original_error=e,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=e.reason or "Validation failed",
                status_code=status,
            )

        return KubernetesError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    def make_retry_decorator(self) -> Any:
        """Create a retry decorator for transient connection errors.

        Only :class:`KubernetesConnectionError` is retried. Applied to reads;
        creates are attempted once.
        """
        return retry(
            retry=retry_if_exception_type(KubernetesConnectionError),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def default_namespace(self) -> str:
        """Namespace used when none is given explicitly."""
        return self._config.namespace or "default"

    @property
    def cluster_scoped(self) -> bool:
        """Whether the process may read cluster-scoped resources."""
        return self._config.cluster_scoped

    @property
    def timeout(self) -> int:
        """API request timeout in seconds."""
        return self._config.cluster.timeout

    def get_current_context(self) -> str:
        """Current context name, ``in-cluster`` inside a pod."""
        return self._current_context or "default"

    def close(self) -> None:
        """Drop cached API group instances."""
        self._core_v1 = None
        self._networking_v1 = None
        self._custom_objects = None
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
