"""Unit tests for Kubernetes client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ingress_shim.config import ClusterConfig, ShimConfig
from ingress_shim.integrations.kubernetes.client import KubernetesClient
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
class TestKubernetesClientInitialization:
    """Test KubernetesClient initialization."""

    @patch("kubernetes.config")
    def test_init_with_default_config(self, mock_config: MagicMock) -> None:
        """Test client initialization with default config."""
        shim_config = ShimConfig()
        client = KubernetesClient(shim_config)

        assert client._config == shim_config
        assert client._retries == 3
        mock_config.load_kube_config.assert_called_once()

    @patch("kubernetes.config")
    def test_init_with_cluster_config(self, mock_config: MagicMock) -> None:
        """Test client initialization with an explicit context and kubeconfig."""
        shim_config = ShimConfig(
            cluster=ClusterConfig(context="test-context", kubeconfig="/path/to/config")
        )
        client = KubernetesClient(shim_config)

        mock_config.load_kube_config.assert_called_once_with(
            config_file="/path/to/config",
            context="test-context",
        )
        assert client._current_context == "test-context"

    @patch("kubernetes.config")
    def test_init_empty_context_uses_current(self, mock_config: MagicMock) -> None:
        """An empty context should defer to the kubeconfig's current context."""
        KubernetesClient(ShimConfig(cluster=ClusterConfig(kubeconfig="/path/to/config")))

        mock_config.load_kube_config.assert_called_once_with(
            config_file="/path/to/config",
            context=None,
        )

    @patch("kubernetes.config")
    def test_init_fallback_to_incluster(self, mock_config: MagicMock) -> None:
        """Test client falls back to in-cluster config."""
        from kubernetes.config import ConfigException

        mock_config.load_kube_config.side_effect = ConfigException("Not found")
        mock_config.load_incluster_config.return_value = None

        client = KubernetesClient(ShimConfig())

        mock_config.load_incluster_config.assert_called_once()
        assert client._current_context == "in-cluster"
        assert client.get_current_context() == "in-cluster"

    @patch("kubernetes.config")
    def test_init_connection_error(self, mock_config: MagicMock) -> None:
        """Test client raises KubernetesConnectionError when config loading fails."""
        from kubernetes.config import ConfigException

        mock_config.load_kube_config.side_effect = ConfigException("No config")
        mock_config.load_incluster_config.side_effect = ConfigException("Not in cluster")

        with pytest.raises(KubernetesConnectionError) as exc_info:
            KubernetesClient(ShimConfig())

        assert "Cannot load Kubernetes configuration" in str(exc_info.value)

    @patch("kubernetes.config")
    def test_zero_retry_attempts_still_tries_once(self, mock_config: MagicMock) -> None:
        """retry_attempts of 0 should still allow a single attempt."""
        client = KubernetesClient(ShimConfig(retry_attempts=0))

        assert client._retries == 1


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientAPIProperties:
    """Test KubernetesClient lazy API properties."""

    @patch("kubernetes.config")
    def test_core_v1_lazy_loading(self, mock_config: MagicMock) -> None:
        """Test CoreV1Api is lazily loaded."""
        client = KubernetesClient(ShimConfig())

        assert client._core_v1 is None

        with patch("kubernetes.client.CoreV1Api") as mock_api:
            _ = client.core_v1
            mock_api.assert_called_once()
            assert client._core_v1 is not None

    @patch("kubernetes.config")
    def test_networking_v1_lazy_loading(self, mock_config: MagicMock) -> None:
        """Test NetworkingV1Api is lazily loaded."""
        client = KubernetesClient(ShimConfig())

        with patch("kubernetes.client.NetworkingV1Api") as mock_api:
            _ = client.networking_v1
            mock_api.assert_called_once()

    @patch("kubernetes.config")
    def test_custom_objects_lazy_loading(self, mock_config: MagicMock) -> None:
        """Test CustomObjectsApi is lazily loaded."""
        client = KubernetesClient(ShimConfig())

        with patch("kubernetes.client.CustomObjectsApi") as mock_api:
            _ = client.custom_objects
            mock_api.assert_called_once()

    @patch("kubernetes.config")
    def test_api_caching(self, mock_config: MagicMock) -> None:
        """Test API instances are cached."""
        client = KubernetesClient(ShimConfig())

        with patch("kubernetes.client.CustomObjectsApi") as mock_api:
            first = client.custom_objects
            second = client.custom_objects

            mock_api.assert_called_once()
            assert first is second


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientErrorTranslation:
    """Test KubernetesClient error translation."""

    def test_translate_401_to_auth_error(self) -> None:
        """Test 401 status code translates to KubernetesAuthError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=401, reason="Unauthorized")
        result = KubernetesClient.translate_api_exception(api_exc)

        assert isinstance(result, KubernetesAuthError)
        assert result.status_code == 401

    def test_translate_403_to_auth_error(self) -> None:
        """Test 403 status code translates to KubernetesAuthError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=403, reason="Forbidden")
        result = KubernetesClient.translate_api_exception(api_exc)

        assert isinstance(result, KubernetesAuthError)
        assert result.status_code == 403

    def test_translate_404_to_not_found_error(self) -> None:
        """Test 404 status code translates to KubernetesNotFoundError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=404)
        result = KubernetesClient.translate_api_exception(
            api_exc,
            resource_type="Certificate",
            resource_name="shop-tls",
            namespace="shop",
        )

        assert isinstance(result, KubernetesNotFoundError)
        assert result.resource_type == "Certificate"
        assert result.resource_name == "shop-tls"
        assert result.message == "Certificate 'shop-tls' not found in namespace 'shop'"

    def test_translate_409_to_conflict_error(self) -> None:
        """Test 409 status code translates to KubernetesConflictError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=409)
        result = KubernetesClient.translate_api_exception(
            api_exc,
            resource_type="Certificate",
            resource_name="shop-tls",
        )

        assert isinstance(result, KubernetesConflictError)
        assert result.resource_type == "Certificate"

    def test_translate_400_to_validation_error(self) -> None:
        """Test 400 status code translates to KubernetesValidationError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=400, reason="Bad Request")
        result = KubernetesClient.translate_api_exception(api_exc)

        assert isinstance(result, KubernetesValidationError)
        assert result.status_code == 400

    def test_translate_422_to_validation_error(self) -> None:
        """Test 422 status code translates to KubernetesValidationError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=422, reason="Unprocessable Entity")
        result = KubernetesClient.translate_api_exception(api_exc)

        assert isinstance(result, KubernetesValidationError)
        assert result.status_code == 422

    @pytest.mark.parametrize("status", [502, 503, 504])
    def test_translate_gateway_errors_to_connection_error(self, status: int) -> None:
        """Gateway and unavailable responses are treated as transient."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=status, reason="Unavailable")
        result = KubernetesClient.translate_api_exception(api_exc)

        assert isinstance(result, KubernetesConnectionError)
        assert result.original_error is api_exc

    def test_translate_os_error_to_connection_error(self) -> None:
        """Socket-level failures translate to KubernetesConnectionError."""
        exc = ConnectionRefusedError("connection refused")
        result = KubernetesClient.translate_api_exception(exc)

        assert isinstance(result, KubernetesConnectionError)
        assert "connection refused" in result.message

    def test_translate_generic_api_exception(self) -> None:
        """Test generic API exception translates to KubernetesError."""
        from kubernetes.client import ApiException

        api_exc = ApiException(status=500, reason="Internal Server Error")
        result = KubernetesClient.translate_api_exception(api_exc)

        assert type(result) is KubernetesError
        assert result.status_code == 500

    def test_translate_non_api_exception(self) -> None:
        """Test non-ApiException translates to generic KubernetesError."""
        exc = ValueError("Something went wrong")
        result = KubernetesClient.translate_api_exception(exc)

        assert isinstance(result, KubernetesError)
        assert "Something went wrong" in result.message

    def test_translate_passes_through_kubernetes_errors(self) -> None:
        """Already translated errors are returned unchanged."""
        exc = KubernetesNotFoundError(resource_type="Issuer", resource_name="ca")

        assert KubernetesClient.translate_api_exception(exc) is exc


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientRetryDecorator:
    """Test KubernetesClient retry decorator."""

    @patch("kubernetes.config")
    def test_does_not_retry_non_connection_errors(self, mock_config: MagicMock) -> None:
        """Only connection errors should be retried."""
        client = KubernetesClient(ShimConfig())
        call = MagicMock(side_effect=KubernetesNotFoundError())

        with pytest.raises(KubernetesNotFoundError):
            client.make_retry_decorator()(call)()

        assert call.call_count == 1

    @patch("kubernetes.config")
    def test_retries_connection_errors(self, mock_config: MagicMock) -> None:
        """Connection errors should be retried up to retry_attempts."""
        client = KubernetesClient(ShimConfig(retry_attempts=2))
        call = MagicMock(side_effect=[KubernetesConnectionError(), "ok"])

        assert client.make_retry_decorator()(call)() == "ok"
        assert call.call_count == 2

    @patch("kubernetes.config")
    def test_single_attempt_reraises(self, mock_config: MagicMock) -> None:
        """With one attempt the original error should surface."""
        client = KubernetesClient(ShimConfig(retry_attempts=1))
        call = MagicMock(side_effect=KubernetesConnectionError("down"))

        with pytest.raises(KubernetesConnectionError, match="down"):
            client.make_retry_decorator()(call)()

        assert call.call_count == 1


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientProperties:
    """Test KubernetesClient properties."""

    @patch("kubernetes.config")
    def test_default_namespace_property(self, mock_config: MagicMock) -> None:
        """Test default_namespace falls back to 'default' when cluster scoped."""
        client = KubernetesClient(ShimConfig())

        assert client.default_namespace == "default"
        assert client.cluster_scoped is True

    @patch("kubernetes.config")
    def test_watch_namespace_property(self, mock_config: MagicMock) -> None:
        """Test a watch namespace becomes the default and disables cluster scope."""
        client = KubernetesClient(ShimConfig(namespace="shop"))

        assert client.default_namespace == "shop"
        assert client.cluster_scoped is False

    @patch("kubernetes.config")
    def test_timeout_property(self, mock_config: MagicMock) -> None:
        """Test timeout property."""
        client = KubernetesClient(ShimConfig(cluster=ClusterConfig(timeout=60)))

        assert client.timeout == 60


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientLifecycle:
    """Test KubernetesClient lifecycle."""

    @patch("kubernetes.config")
    def test_close(self, mock_config: MagicMock) -> None:
        """Test close drops cached API instances."""
        client = KubernetesClient(ShimConfig())
        client._core_v1 = MagicMock()
        client._custom_objects = MagicMock()

        client.close()

        assert client._core_v1 is None
        assert client._custom_objects is None

    @patch("kubernetes.config")
    def test_context_manager(self, mock_config: MagicMock) -> None:
        """Test client as context manager."""
        with KubernetesClient(ShimConfig()) as client:
            client._networking_v1 = MagicMock()

        assert client._networking_v1 is None
