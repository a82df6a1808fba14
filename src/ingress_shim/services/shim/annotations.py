"""Annotations that opt an Ingress into certificate sync."""

from __future__ import annotations

from collections.abc import Mapping

# kube-lego compatible flag. "true" requests a Certificate with all defaults.
TLS_ACME_ANNOTATION = "kubernetes.io/tls-acme"
# Overrides the issuer on the created Certificate (namespaced Issuer).
ISSUER_NAME_ANNOTATION = "certmanager.k8s.io/issuer"
# Overrides the issuer on the created Certificate with a ClusterIssuer.
CLUSTER_ISSUER_NAME_ANNOTATION = "certmanager.k8s.io/cluster-issuer"
# Overrides the default ACME challenge type (http01 or dns01).
ACME_CHALLENGE_TYPE_ANNOTATION = "certmanager.k8s.io/acme-challenge-type"
# Overrides the default DNS01 provider when the challenge type is dns01.
ACME_DNS01_PROVIDER_ANNOTATION = "certmanager.k8s.io/acme-dns01-provider"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})

# Presence of any of these is enough to sync, whatever the value.
_OVERRIDE_ANNOTATIONS = (
    ISSUER_NAME_ANNOTATION,
    CLUSTER_ISSUER_NAME_ANNOTATION,
    ACME_CHALLENGE_TYPE_ANNOTATION,
    ACME_DNS01_PROVIDER_ANNOTATION,
)


def parse_bool(value: str) -> bool:
    """Parse a boolean the way Kubernetes tooling does.

    Accepts ``1 t T TRUE true True`` as true. Everything else, including
    unparseable input, is false.
    """
    return value in _TRUE_VALUES


def should_sync(annotations: Mapping[str, str] | None) -> bool:
    """Whether an Ingress with these annotations should get Certificates."""
    annotations = annotations or {}
    if any(key in annotations for key in _OVERRIDE_ANNOTATIONS):
        return True
    return parse_bool(annotations.get(TLS_ACME_ANNOTATION, ""))
