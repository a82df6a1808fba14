"""Shared fixtures for certificate sync tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from ingress_shim.config import ShimDefaults
from ingress_shim.integrations.kubernetes.exceptions import KubernetesNotFoundError
from ingress_shim.integrations.kubernetes.models.certmanager import (
    Certificate,
    GenericIssuer,
    IssuerKind,
)
from ingress_shim.integrations.kubernetes.models.ingress import IngressResource, IngressTLS

IngressFactory = Callable[..., IngressResource]


@pytest.fixture
def defaults() -> ShimDefaults:
    """Defaults with a namespaced ACME issuer and http01 challenges."""
    return ShimDefaults(issuer_name="letsencrypt", acme_challenge_type="http01")


@pytest.fixture
def acme_issuer() -> GenericIssuer:
    """An ACME Issuer."""
    return GenericIssuer(
        name="letsencrypt",
        namespace="shop",
        spec={"acme": {"server": "https://acme.example.com/directory"}},
    )


@pytest.fixture
def ca_issuer() -> GenericIssuer:
    """A non-ACME ClusterIssuer."""
    return GenericIssuer(
        name="internal-ca", kind=IssuerKind.CLUSTER_ISSUER, spec={"ca": {"secretName": "ca"}}
    )


@pytest.fixture
def make_ingress() -> IngressFactory:
    """Build Ingresses in the shop namespace."""

    def _make(
        annotations: dict[str, str] | None = None,
        tls: list[tuple[list[str], str]] | None = None,
        name: str = "shop",
    ) -> IngressResource:
        return IngressResource(
            name=name,
            namespace="shop",
            uid="uid-ing-1",
            annotations=annotations or {},
            tls=[IngressTLS(hosts=hosts, secret_name=secret) for hosts, secret in tls or []],
        )

    return _make


@pytest.fixture
def mock_certmanager(acme_issuer: GenericIssuer) -> MagicMock:
    """A CertManagerManager stand-in with an empty Certificate store.

    ``created`` holds every Certificate passed to ``create_certificate`` and
    later lookups find them, like the API server would.
    """
    store: dict[tuple[str, str], Certificate] = {}
    manager = MagicMock()
    manager.created = []

    def get_certificate(name: str, namespace: str | None = None) -> Certificate:
        try:
            return store[(namespace or "", name)]
        except KeyError:
            raise KubernetesNotFoundError(
                resource_type="Certificate", resource_name=name, namespace=namespace
            ) from None

    def create_certificate(certificate: Certificate) -> Certificate:
        store[(certificate.namespace or "", certificate.name)] = certificate
        manager.created.append(certificate)
        return certificate

    manager.get_certificate.side_effect = get_certificate
    manager.create_certificate.side_effect = create_certificate
    manager.get_issuer.return_value = acme_issuer
    return manager


@pytest.fixture
def mock_recorder() -> MagicMock:
    """An EventRecorder stand-in."""
    return MagicMock()