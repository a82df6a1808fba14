"""Kubernetes resource models used by the certificate sync."""

from ingress_shim.integrations.kubernetes.models.base import K8sEntityBase, OwnerReference
from ingress_shim.integrations.kubernetes.models.certmanager import (
    CERT_MANAGER_API_VERSION,
    CERT_MANAGER_GROUP,
    CERT_MANAGER_VERSION,
    ACMECertificateConfig,
    ACMEDomainConfig,
    Certificate,
    CertificateSpec,
    ChallengeType,
    DNS01Config,
    GenericIssuer,
    HTTP01Config,
    IssuerKind,
    ObjectReference,
)
from ingress_shim.integrations.kubernetes.models.ingress import (
    INGRESS_API_VERSION,
    INGRESS_KIND,
    IngressResource,
    IngressTLS,
)

__all__ = [
    "ACMECertificateConfig",
    "ACMEDomainConfig",
    "CERT_MANAGER_API_VERSION",
    "CERT_MANAGER_GROUP",
    "CERT_MANAGER_VERSION",
    "Certificate",
    "CertificateSpec",
    "ChallengeType",
    "DNS01Config",
    "GenericIssuer",
    "HTTP01Config",
    "INGRESS_API_VERSION",
    "INGRESS_KIND",
    "IngressResource",
    "IngressTLS",
    "IssuerKind",
    "K8sEntityBase",
    "ObjectReference",
    "OwnerReference",
]
