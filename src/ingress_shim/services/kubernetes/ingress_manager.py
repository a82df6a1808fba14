"""Ingress manager.

Reads Ingresses through ``NetworkingV1Api`` and returns them as
:class:`IngressResource` models.
"""

from __future__ import annotations

from typing import Any

from ingress_shim.integrations.kubernetes.models.ingress import IngressResource
from ingress_shim.services.kubernetes.base import K8sBaseManager


class IngressManager(K8sBaseManager):
    """Manager for Ingress resources."""

    _entity_name = "ingress"

    def get_ingress(self, name: str, namespace: str | None = None) -> IngressResource:
        """Get a single Ingress by name."""
        ns = self._resolve_namespace(namespace)
        self._log.debug("getting_ingress", name=name, namespace=ns)
        result = self._read(
            self._client.networking_v1.read_namespaced_ingress,
            name,
            ns,
            resource_type="Ingress",
            resource_name=name,
            namespace=ns,
        )
        return IngressResource.from_k8s_object(result)

    def list_ingresses(
        self,
        namespace: str | None = None,
        *,
        all_namespaces: bool = False,
        label_selector: str | None = None,
    ) -> list[IngressResource]:
        """List Ingresses in one namespace or across the cluster.

        Args:
            namespace: Target namespace. Ignored with ``all_namespaces``.
            all_namespaces: List across all namespaces.
            label_selector: Filter by label selector.

        Returns:
            Ingresses in API server order.
        """
        kwargs: dict[str, Any] = {}
        if label_selector:
            kwargs["label_selector"] = label_selector

        if all_namespaces:
            self._log.debug("listing_ingresses", namespace="*")
            result = self._read(
                self._client.networking_v1.list_ingress_for_all_namespaces,
                resource_type="Ingress",
                **kwargs,
            )
        else:
            ns = self._resolve_namespace(namespace)
            self._log.debug("listing_ingresses", namespace=ns)
            result = self._read(
                self._client.networking_v1.list_namespaced_ingress,
                ns,
                resource_type="Ingress",
                namespace=ns,
                **kwargs,
            )

        items = [IngressResource.from_k8s_object(item) for item in result.items or []]
        self._log.debug("listed_ingresses", count=len(items))
        return items
