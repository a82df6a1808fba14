"""Ingress models.

``NetworkingV1Api`` returns typed SDK objects, read here with ``getattr``
and normalised into :class:`IngressResource`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ingress_shim.integrations.kubernetes.models.base import (
    K8sEntityBase,
    OwnerReference,
    _safe_get,
)

INGRESS_API_VERSION = "networking.k8s.io/v1"
INGRESS_KIND = "Ingress"


class IngressTLS(BaseModel):
    """One entry of ``spec.tls``."""

    model_config = ConfigDict(extra="ignore")

    hosts: list[str] = Field(default_factory=list, description="Hostnames covered by the secret")
    secret_name: str = Field(default="", description="Secret the certificate is stored in")


class IngressResource(K8sEntityBase):
    """An Ingress and the parts of it that drive Certificate creation."""

    tls: list[IngressTLS] = Field(default_factory=list, description="TLS declarations in order")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> IngressResource:
        """Create from a kubernetes ``V1Ingress`` object."""
        annotations = _safe_get(obj, "metadata", "annotations")
        tls_entries = _safe_get(obj, "spec", "tls") or []
        return cls(
            name=_safe_get(obj, "metadata", "name", default=""),
            namespace=_safe_get(obj, "metadata", "namespace"),
            uid=_safe_get(obj, "metadata", "uid"),
            annotations=dict(annotations) if annotations else {},
            tls=[
                IngressTLS(
                    hosts=list(getattr(t, "hosts", None) or []),
                    secret_name=getattr(t, "secret_name", None) or "",
                )
                for t in tls_entries
            ],
        )

    @property
    def key(self) -> str:
        """``namespace/name`` of this Ingress."""
        return f"{self.namespace}/{self.name}" if self.namespace else self.name

    def controller_ref(self) -> OwnerReference:
        """Owner reference marking this Ingress as the managing controller."""
        return OwnerReference(
            api_version=INGRESS_API_VERSION,
            kind=INGRESS_KIND,
            name=self.name,
            uid=self.uid,
            controller=True,
            block_owner_deletion=True,
        )

    def event_target(self) -> dict[str, Any]:
        """``involvedObject`` reference for events about this Ingress."""
        ref: dict[str, Any] = {
            "apiVersion": INGRESS_API_VERSION,
            "kind": INGRESS_KIND,
            "name": self.name,
            "namespace": self.namespace,
        }
        if self.uid:
            ref["uid"] = self.uid
        return ref
