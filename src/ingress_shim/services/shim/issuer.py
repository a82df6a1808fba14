"""Issuer selection for an Ingress.

The issuer comes from the process defaults unless the Ingress overrides it.
The cluster-issuer annotation is applied after the issuer annotation, so an
Ingress carrying both ends up with the ClusterIssuer.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

import structlog

from ingress_shim.config import ShimDefaults
from ingress_shim.integrations.kubernetes.exceptions import KubernetesNotFoundError
from ingress_shim.integrations.kubernetes.models.certmanager import (
    GenericIssuer,
    IssuerKind,
    ObjectReference,
)
from ingress_shim.services.shim.annotations import (
    CLUSTER_ISSUER_NAME_ANNOTATION,
    ISSUER_NAME_ANNOTATION,
)
from ingress_shim.services.shim.exceptions import ShimConfigurationError

logger = structlog.get_logger()

# (name, namespace) -> Issuer
IssuerGetter = Callable[[str, str], GenericIssuer]
# name -> ClusterIssuer
ClusterIssuerGetter = Callable[[str], GenericIssuer]


def resolve_issuer_ref(
    annotations: Mapping[str, str] | None,
    defaults: ShimDefaults,
) -> ObjectReference:
    """Pick the issuer a Certificate for this Ingress should reference."""
    annotations = annotations or {}
    name = defaults.issuer_name
    kind = defaults.issuer_kind
    if ISSUER_NAME_ANNOTATION in annotations:
        name = annotations[ISSUER_NAME_ANNOTATION]
        kind = IssuerKind.ISSUER
    if CLUSTER_ISSUER_NAME_ANNOTATION in annotations:
        name = annotations[CLUSTER_ISSUER_NAME_ANNOTATION]
        kind = IssuerKind.CLUSTER_ISSUER
    return ObjectReference(name=name, kind=kind)


class IssuerResolver:
    """Fetches the issuer an :class:`ObjectReference` points at.

    Args:
        get_issuer: Looks up a namespaced Issuer.
        get_cluster_issuer: Looks up a ClusterIssuer. ``None`` when the
            process is scoped to a single namespace, in which case
            ClusterIssuer references cannot be resolved.
    """

    def __init__(
        self,
        get_issuer: IssuerGetter,
        get_cluster_issuer: ClusterIssuerGetter | None = None,
    ) -> None:
        self._get_issuer = get_issuer
        self._get_cluster_issuer = get_cluster_issuer
        self._lookups: dict[IssuerKind, Callable[[str, str], GenericIssuer]] = {
            IssuerKind.ISSUER: self._namespaced,
            IssuerKind.CLUSTER_ISSUER: self._cluster,
        }

    def fetch_issuer(self, namespace: str, name: str, kind: IssuerKind | str) -> GenericIssuer:
        """Fetch the issuer named by ``name`` and ``kind``.

        An empty kind means a namespaced Issuer. An empty name never matches
        an issuer and is reported as not found without an API call.

        Raises:
            ShimConfigurationError: If ``kind`` is not a known issuer kind, or
                a ClusterIssuer is requested while namespace scoped.
            KubernetesNotFoundError: If ``name`` is empty or the issuer does
                not exist.
        """
        try:
            issuer_kind = IssuerKind(kind or IssuerKind.ISSUER)
        except ValueError:
            raise ShimConfigurationError(
                f"invalid value {str(kind)!r} for issuer kind. Must be empty, "
                f"{IssuerKind.ISSUER.value!r} or {IssuerKind.CLUSTER_ISSUER.value!r}"
            ) from None
        if not name:
            raise KubernetesNotFoundError(
                message=f"no {issuer_kind.value} name given",
                resource_type=issuer_kind.value,
                namespace=namespace or None,
            )
        logger.debug("fetching_issuer", name=name, kind=str(issuer_kind), namespace=namespace)
        return self._lookups[issuer_kind](namespace, name)

    def _namespaced(self, namespace: str, name: str) -> GenericIssuer:
        return self._get_issuer(name, namespace)

    def _cluster(self, namespace: str, name: str) -> GenericIssuer:
        if self._get_cluster_issuer is None:
            raise ShimConfigurationError(
                f"cannot get ClusterIssuer for {name!r} as ingress-shim is scoped "
                "to a single namespace"
            )
        return self._get_cluster_issuer(name)
