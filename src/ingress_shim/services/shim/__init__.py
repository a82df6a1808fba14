"""Certificate sync: derive cert-manager Certificates from Ingress TLS entries."""

from ingress_shim.services.shim.annotations import should_sync
from ingress_shim.services.shim.certificates import CertificateBuilder
from ingress_shim.services.shim.challenge import build_acme_config
from ingress_shim.services.shim.controller import IngressShimController
from ingress_shim.services.shim.exceptions import (
    ShimConfigurationError,
    ShimError,
    ShimValidationError,
)
from ingress_shim.services.shim.issuer import IssuerResolver, resolve_issuer_ref

__all__ = [
    "CertificateBuilder",
    "IngressShimController",
    "IssuerResolver",
    "ShimConfigurationError",
    "ShimError",
    "ShimValidationError",
    "build_acme_config",
    "resolve_issuer_ref",
    "should_sync",
]
