"""Unit tests for sync annotations."""

from __future__ import annotations

import pytest

from ingress_shim.services.shim.annotations import (
    ACME_CHALLENGE_TYPE_ANNOTATION,
    ACME_DNS01_PROVIDER_ANNOTATION,
    CLUSTER_ISSUER_NAME_ANNOTATION,
    ISSUER_NAME_ANNOTATION,
    TLS_ACME_ANNOTATION,
    parse_bool,
    should_sync,
)


@pytest.mark.unit
@pytest.mark.shim
class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_values(self, value: str) -> None:
        """Kubernetes-style true spellings parse as true."""
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "yes", "tRUE", " true", ""])
    def test_other_values(self, value: str) -> None:
        """Everything else parses as false."""
        assert parse_bool(value) is False


@pytest.mark.unit
@pytest.mark.shim
class TestShouldSync:
    """Tests for should_sync."""

    def test_no_annotations(self) -> None:
        """An Ingress without annotations is not synced."""
        assert should_sync(None) is False
        assert should_sync({}) is False

    def test_unrelated_annotations(self) -> None:
        """Unrelated annotations do not opt in."""
        assert should_sync({"nginx.ingress.kubernetes.io/rewrite-target": "/"}) is False

    def test_tls_acme_true(self) -> None:
        """kubernetes.io/tls-acme set to a true value opts in."""
        assert should_sync({TLS_ACME_ANNOTATION: "true"}) is True

    def test_tls_acme_false(self) -> None:
        """kubernetes.io/tls-acme set to anything else does not."""
        assert should_sync({TLS_ACME_ANNOTATION: "false"}) is False
        assert should_sync({TLS_ACME_ANNOTATION: "enabled"}) is False

    @pytest.mark.parametrize(
        "key",
        [
            ISSUER_NAME_ANNOTATION,
            CLUSTER_ISSUER_NAME_ANNOTATION,
            ACME_CHALLENGE_TYPE_ANNOTATION,
            ACME_DNS01_PROVIDER_ANNOTATION,
        ],
    )
    def test_override_presence_opts_in(self, key: str) -> None:
        """Any override annotation opts in, even with an empty value."""
        assert should_sync({key: ""}) is True
