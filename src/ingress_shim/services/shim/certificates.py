"""Drafting Certificates from the TLS entries of an Ingress."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from ingress_shim.config import ShimDefaults
from ingress_shim.integrations.kubernetes.exceptions import KubernetesNotFoundError
from ingress_shim.integrations.kubernetes.models.certmanager import (
    Certificate,
    CertificateSpec,
    GenericIssuer,
    ObjectReference,
)
from ingress_shim.integrations.kubernetes.models.ingress import IngressResource, IngressTLS
from ingress_shim.services.shim.challenge import build_acme_config
from ingress_shim.services.shim.exceptions import ShimValidationError

logger = structlog.get_logger()

# (name, namespace) -> Certificate, raising KubernetesNotFoundError if absent
CertificateGetter = Callable[[str, str], Certificate]


def validate_tls(ingress: IngressResource, index: int, tls: IngressTLS) -> None:
    """Check a TLS entry can become a Certificate.

    Raises:
        ShimValidationError: If the entry has no hosts or no secret name.
    """
    if not tls.hosts:
        raise ShimValidationError(
            f"secret {tls.secret_name!r} for ingress {ingress.name!r} has no hosts specified",
            ingress=ingress.key,
        )
    if not tls.secret_name:
        raise ShimValidationError(
            f"TLS entry {index} for ingress {ingress.name!r} must specify a secretName",
            ingress=ingress.key,
        )


class CertificateBuilder:
    """Builds the Certificates an Ingress still needs.

    The secret name is the Certificate name, so an existing Certificate with
    that name means the TLS entry is already handled. It is left untouched
    even if it references a different issuer.

    Args:
        get_certificate: Looks up an existing Certificate.
        defaults: Process-wide defaults for challenge configuration.
    """

    def __init__(self, get_certificate: CertificateGetter, defaults: ShimDefaults) -> None:
        self._get_certificate = get_certificate
        self._defaults = defaults

    def build(
        self,
        ingress: IngressResource,
        issuer_ref: ObjectReference,
        issuer: GenericIssuer,
    ) -> list[Certificate]:
        """Draft one Certificate per TLS entry that does not have one yet.

        Stops at the first invalid entry or failed lookup; nothing built up
        to that point is returned.

        Returns:
            Drafts in TLS entry order. Empty when every entry already has a
            Certificate.

        Raises:
            ShimValidationError: If a TLS entry is invalid.
            ShimConfigurationError: If challenge configuration fails.
            KubernetesError: If looking up an existing Certificate fails
                for any reason other than not-found.
        """
        namespace = ingress.namespace or ""
        certificates: list[Certificate] = []
        for index, tls in enumerate(ingress.tls):
            validate_tls(ingress, index, tls)

            if self._exists(tls.secret_name, namespace):
                logger.info(
                    "certificate_exists",
                    certificate=tls.secret_name,
                    ingress=ingress.key,
                )
                continue

            certificates.append(
                Certificate(
                    name=tls.secret_name,
                    namespace=namespace,
                    owner_references=[ingress.controller_ref()],
                    spec=CertificateSpec(
                        dns_names=tls.hosts,
                        secret_name=tls.secret_name,
                        issuer_ref=issuer_ref,
                        acme=build_acme_config(issuer, ingress, tls, self._defaults),
                    ),
                )
            )
        return certificates

    def _exists(self, name: str, namespace: str) -> bool:
        try:
            self._get_certificate(name, namespace)
        except KubernetesNotFoundError:
            return False
        return True
