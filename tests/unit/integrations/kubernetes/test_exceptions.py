"""Unit tests for Kubernetes exceptions."""

from __future__ import annotations

import pytest

from ingress_shim.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesError:
    """Test KubernetesError base exception."""

    def test_init_minimal(self) -> None:
        """Test initialization with minimal arguments."""
        error = KubernetesError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.status_code is None
        assert error.resource_type is None
        assert error.resource_name is None
        assert error.namespace is None

    def test_str_message_only(self) -> None:
        """Test string representation with message only."""
        error = KubernetesError("Test error")
        assert str(error) == "Test error"

    def test_str_with_status_code(self) -> None:
        """Test string representation with status code."""
        error = KubernetesError("Test error", status_code=500)
        assert str(error) == "Test error (status: 500)"

    def test_str_with_resource(self) -> None:
        """Test string representation with resource and namespace."""
        error = KubernetesError(
            "Test error",
            resource_type="Certificate",
            resource_name="shop-tls",
            namespace="shop",
        )
        assert str(error) == "Test error [Certificate/shop-tls in shop]"

    def test_str_cluster_scoped_resource(self) -> None:
        """Test string representation without a namespace."""
        error = KubernetesError(
            "Test error", resource_type="ClusterIssuer", resource_name="letsencrypt"
        )
        assert str(error) == "Test error [ClusterIssuer/letsencrypt]"


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesSubclasses:
    """Test the KubernetesError subclasses."""

    def test_connection_error_keeps_cause(self) -> None:
        """Connection errors carry the underlying exception."""
        cause = OSError("refused")
        error = KubernetesConnectionError(original_error=cause)

        assert error.message == "Failed to connect to Kubernetes cluster"
        assert error.original_error is cause
        assert isinstance(error, KubernetesError)

    def test_auth_error_defaults(self) -> None:
        """Auth errors default to status 401."""
        error = KubernetesAuthError(reason="Unauthorized")

        assert error.status_code == 401
        assert error.reason == "Unauthorized"

    def test_not_found_message_from_resource(self) -> None:
        """Not found errors build their message from the resource."""
        error = KubernetesNotFoundError(
            resource_type="Issuer", resource_name="ca", namespace="shop"
        )

        assert error.message == "Issuer 'ca' not found in namespace 'shop'"
        assert error.status_code == 404

    def test_not_found_default_message(self) -> None:
        """Not found errors keep the default message without a resource."""
        error = KubernetesNotFoundError()

        assert error.message == "Kubernetes resource not found"

    def test_conflict_message_from_resource(self) -> None:
        """Conflict errors build their message from the resource."""
        error = KubernetesConflictError(resource_type="Certificate", resource_name="shop-tls")

        assert error.message == "Certificate 'shop-tls' already exists"
        assert error.status_code == 409

    def test_validation_error_defaults(self) -> None:
        """Validation errors default to status 422 and no field errors."""
        error = KubernetesValidationError()

        assert error.status_code == 422
        assert error.validation_errors == {}

    def test_validation_error_with_fields(self) -> None:
        """Validation errors keep field-level details."""
        error = KubernetesValidationError(
            "bad spec", validation_errors={"spec.dnsNames": "required"}, status_code=400
        )

        assert error.validation_errors == {"spec.dnsNames": "required"}
        assert error.status_code == 400
