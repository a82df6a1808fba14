"""ACME challenge configuration for derived Certificates."""

from __future__ import annotations

from ingress_shim.config import ShimDefaults
from ingress_shim.integrations.kubernetes.models.certmanager import (
    ACMECertificateConfig,
    ACMEDomainConfig,
    ChallengeType,
    DNS01Config,
    GenericIssuer,
    HTTP01Config,
)
from ingress_shim.integrations.kubernetes.models.ingress import IngressResource, IngressTLS
from ingress_shim.services.shim.annotations import (
    ACME_CHALLENGE_TYPE_ANNOTATION,
    ACME_DNS01_PROVIDER_ANNOTATION,
)
from ingress_shim.services.shim.exceptions import ShimConfigurationError


def build_acme_config(
    issuer: GenericIssuer,
    ingress: IngressResource,
    tls: IngressTLS,
    defaults: ShimDefaults,
) -> ACMECertificateConfig | None:
    """Challenge configuration for one TLS entry.

    Non-ACME issuers need none and get ``None``. For ACME issuers the
    challenge type comes from the Ingress annotation, else the defaults.

    Raises:
        ShimConfigurationError: If the challenge type is unknown, or it is
            dns01 and no provider is set by annotation or default.
    """
    if not issuer.is_acme:
        return None

    annotations = ingress.annotations
    challenge_type = annotations.get(ACME_CHALLENGE_TYPE_ANNOTATION, defaults.acme_challenge_type)

    if challenge_type == ChallengeType.HTTP01:
        domain_cfg = ACMEDomainConfig(domains=tls.hosts, http01=HTTP01Config(ingress=ingress.name))
    elif challenge_type == ChallengeType.DNS01:
        provider = annotations.get(
            ACME_DNS01_PROVIDER_ANNOTATION, defaults.acme_dns01_provider_name
        )
        if not provider:
            raise ShimConfigurationError(
                "no acme issuer dns01 challenge provider specified",
                ingress=ingress.key,
            )
        domain_cfg = ACMEDomainConfig(domains=tls.hosts, dns01=DNS01Config(provider=provider))
    else:
        raise ShimConfigurationError(
            f"invalid acme issuer challenge type specified {challenge_type!r}",
            ingress=ingress.key,
        )

    return ACMECertificateConfig(config=[domain_cfg])
