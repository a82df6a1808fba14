"""Shared fixtures for Kubernetes manager tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ingress_shim.integrations.kubernetes.client import KubernetesClient


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mock Kubernetes client.

    Retries are disabled and error translation uses the real
    ``translate_api_exception`` so managers raise the same exceptions they
    would against a live API server.
    """
    mock_client = MagicMock()
    mock_client.default_namespace = "default"
    mock_client.timeout = 30
    mock_client.make_retry_decorator.return_value = lambda fn: fn
    mock_client.translate_api_exception.side_effect = KubernetesClient.translate_api_exception
    return mock_client
