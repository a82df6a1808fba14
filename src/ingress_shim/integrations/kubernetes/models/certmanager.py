"""Cert-manager resource models.

Cert-manager CRDs are accessed via ``CustomObjectsApi`` which returns raw
``dict`` objects rather than typed SDK classes. ``from_k8s_object``
classmethods therefore use ``dict.get()``, and ``to_k8s_object`` renders
the manifest sent back to the API server.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ingress_shim.integrations.kubernetes.models.base import K8sEntityBase, OwnerReference

CERT_MANAGER_GROUP = "certmanager.k8s.io"
CERT_MANAGER_VERSION = "v1alpha1"
CERT_MANAGER_API_VERSION = f"{CERT_MANAGER_GROUP}/{CERT_MANAGER_VERSION}"


class IssuerKind(StrEnum):
    """Scope of the issuer a Certificate points at."""

    ISSUER = "Issuer"
    """Namespaced issuer, looked up in the Certificate's namespace."""

    CLUSTER_ISSUER = "ClusterIssuer"
    """Cluster-scoped issuer."""


class ChallengeType(StrEnum):
    """ACME challenge mechanisms."""

    HTTP01 = "http01"
    DNS01 = "dns01"


class ObjectReference(BaseModel):
    """Reference from a Certificate to its issuer."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    kind: IssuerKind = IssuerKind.ISSUER

    def to_k8s_object(self) -> dict[str, Any]:
        return {"name": self.name, "kind": str(self.kind)}


# =============================================================================
# Issuer / ClusterIssuer
# =============================================================================


class GenericIssuer(K8sEntityBase):
    """Issuer or ClusterIssuer, reduced to what certificate sync looks at."""

    kind: IssuerKind = Field(default=IssuerKind.ISSUER, description="Issuer scope")
    spec: dict[str, Any] = Field(default_factory=dict, description="Raw issuer spec")

    @property
    def is_acme(self) -> bool:
        """Whether the issuer declares an ACME configuration."""
        return self.spec.get("acme") is not None

    @classmethod
    def from_k8s_object(
        cls,
        obj: dict[str, Any],
        *,
        kind: IssuerKind = IssuerKind.ISSUER,
    ) -> GenericIssuer:
        """Create from an Issuer/ClusterIssuer CRD dict."""
        metadata: dict[str, Any] = obj.get("metadata", {})
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace"),
            uid=metadata.get("uid"),
            annotations=metadata.get("annotations") or {},
            kind=kind,
            spec=obj.get("spec") or {},
        )


# =============================================================================
# ACME challenge configuration
# =============================================================================


class HTTP01Config(BaseModel):
    """Solve HTTP01 challenges through the named Ingress."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    ingress: str

    def to_k8s_object(self) -> dict[str, Any]:
        return {"ingress": self.ingress}


class DNS01Config(BaseModel):
    """Solve DNS01 challenges with the named provider."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    provider: str

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """A DNS01 solver needs a provider."""
        if not v:
            raise ValueError("dns01 provider must not be empty")
        return v

    def to_k8s_object(self) -> dict[str, Any]:
        return {"provider": self.provider}


class ACMEDomainConfig(BaseModel):
    """Challenge configuration for a set of domains."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    domains: list[str] = Field(default_factory=list)
    http01: HTTP01Config | None = None
    dns01: DNS01Config | None = None

    @model_validator(mode="after")
    def exactly_one_solver(self) -> ACMEDomainConfig:
        """Exactly one of http01 and dns01 must be set."""
        if (self.http01 is None) == (self.dns01 is None):
            raise ValueError("exactly one of http01 or dns01 must be set")
        return self

    @property
    def challenge_type(self) -> ChallengeType:
        return ChallengeType.HTTP01 if self.http01 is not None else ChallengeType.DNS01

    def to_k8s_object(self) -> dict[str, Any]:
        obj: dict[str, Any] = {"domains": list(self.domains)}
        if self.http01 is not None:
            obj["http01"] = self.http01.to_k8s_object()
        if self.dns01 is not None:
            obj["dns01"] = self.dns01.to_k8s_object()
        return obj


class ACMECertificateConfig(BaseModel):
    """``spec.acme`` of a Certificate."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    config: list[ACMEDomainConfig] = Field(default_factory=list)

    def to_k8s_object(self) -> dict[str, Any]:
        return {"config": [c.to_k8s_object() for c in self.config]}


# =============================================================================
# Certificate
# =============================================================================


class CertificateSpec(BaseModel):
    """``spec`` of a Certificate."""

    model_config = ConfigDict(extra="ignore")

    secret_name: str
    dns_names: list[str] = Field(default_factory=list)
    issuer_ref: ObjectReference
    acme: ACMECertificateConfig | None = None


class Certificate(K8sEntityBase):
    """Cert-manager Certificate, as created for an Ingress TLS entry."""

    owner_references: list[OwnerReference] = Field(default_factory=list)
    spec: CertificateSpec

    def to_k8s_object(self) -> dict[str, Any]:
        """Render the manifest for ``create_namespaced_custom_object``."""
        metadata: dict[str, Any] = {"name": self.name, "namespace": self.namespace}
        if self.annotations:
            metadata["annotations"] = dict(self.annotations)
        if self.owner_references:
            metadata["ownerReferences"] = [r.to_k8s_object() for r in self.owner_references]

        spec: dict[str, Any] = {
            "secretName": self.spec.secret_name,
            "dnsNames": list(self.spec.dns_names),
            "issuerRef": self.spec.issuer_ref.to_k8s_object(),
        }
        if self.spec.acme is not None:
            spec["acme"] = self.spec.acme.to_k8s_object()

        return {
            "apiVersion": CERT_MANAGER_API_VERSION,
            "kind": "Certificate",
            "metadata": metadata,
            "spec": spec,
        }

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> Certificate:
        """Create from a Certificate CRD dict.

        The ACME solver block is not read back; only identity, ownership and
        the issuer reference are needed for existing Certificates.
        """
        metadata: dict[str, Any] = obj.get("metadata", {})
        spec: dict[str, Any] = obj.get("spec", {})
        issuer_ref: dict[str, Any] = spec.get("issuerRef", {})
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace"),
            uid=metadata.get("uid"),
            annotations=metadata.get("annotations") or {},
            owner_references=[
                OwnerReference.from_k8s_object(r) for r in metadata.get("ownerReferences") or []
            ],
            spec=CertificateSpec(
                secret_name=spec.get("secretName", ""),
                dns_names=spec.get("dnsNames", []),
                issuer_ref=ObjectReference(
                    name=issuer_ref.get("name", ""),
                    kind=issuer_ref.get("kind") or IssuerKind.ISSUER,
                ),
            ),
        )
