"""Certificate sync for a single Ingress.

:meth:`IngressShimController.sync` runs in two phases. All Certificates
are drafted first, so an invalid TLS entry means nothing is created. They
are then created in order, stopping at the first failure. Certificates
created before a failure stay in place; re-running the sync skips them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ingress_shim.services.kubernetes.event_recorder import EVENT_TYPE_NORMAL
from ingress_shim.services.shim.annotations import should_sync
from ingress_shim.services.shim.certificates import CertificateBuilder
from ingress_shim.services.shim.issuer import IssuerResolver, resolve_issuer_ref

if TYPE_CHECKING:
    from ingress_shim.config import ShimDefaults
    from ingress_shim.integrations.kubernetes.models.certmanager import Certificate
    from ingress_shim.integrations.kubernetes.models.ingress import IngressResource
    from ingress_shim.services.kubernetes.certmanager_manager import CertManagerManager
    from ingress_shim.services.kubernetes.event_recorder import EventRecorder

logger = structlog.get_logger()

CREATE_CERTIFICATE_REASON = "CreateCertificate"


class IngressShimController:
    """Creates cert-manager Certificates for annotated Ingresses.

    Args:
        certmanager: Store for Certificates, Issuers and ClusterIssuers.
        recorder: Sink for events about the Ingress.
        defaults: Process-wide issuer and challenge defaults.
        cluster_scoped: Whether ClusterIssuers may be used. False when the
            process only watches a single namespace.
    """

    def __init__(
        self,
        certmanager: CertManagerManager,
        recorder: EventRecorder,
        defaults: ShimDefaults,
        *,
        cluster_scoped: bool = True,
    ) -> None:
        self._certmanager = certmanager
        self._recorder = recorder
        self._defaults = defaults
        self._issuers = IssuerResolver(
            certmanager.get_issuer,
            certmanager.get_cluster_issuer if cluster_scoped else None,
        )
        self._builder = CertificateBuilder(certmanager.get_certificate, defaults)

    def sync(self, ingress: IngressResource) -> list[Certificate]:
        """Create the Certificates ``ingress`` asks for and does not have yet.

        Returns:
            The Certificates created by this call.

        Raises:
            ShimError: If a TLS entry or the issuer configuration is invalid.
            KubernetesError: If a lookup or create fails. Certificates created
                earlier in the same call are not rolled back.
        """
        log = logger.bind(ingress=ingress.key)
        if not should_sync(ingress.annotations):
            log.info("skipping_ingress", reason="no certificate annotations")
            return []

        issuer_ref = resolve_issuer_ref(ingress.annotations, self._defaults)
        issuer = self._issuers.fetch_issuer(
            ingress.namespace or "", issuer_ref.name, issuer_ref.kind
        )
        drafts = self._builder.build(ingress, issuer_ref, issuer)
        log.debug("built_certificates", count=len(drafts), issuer=issuer_ref.name)

        created: list[Certificate] = []
        for draft in drafts:
            created.append(self._certmanager.create_certificate(draft))
            self._recorder.event(
                ingress,
                EVENT_TYPE_NORMAL,
                CREATE_CERTIFICATE_REASON,
                f'Successfully created Certificate "{draft.name}"',
            )
        return created
