"""Errors raised while deriving Certificates from an Ingress.

Store failures (lookups, creates) are raised as
:class:`~ingress_shim.integrations.kubernetes.exceptions.KubernetesError`
subclasses and are not wrapped.
"""

from __future__ import annotations


class ShimError(Exception):
    """Base exception for certificate sync errors.

    Attributes:
        message: Human-readable error message.
        ingress: ``namespace/name`` of the Ingress being synced, if known.
    """

    def __init__(self, message: str, ingress: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.ingress = ingress


class ShimValidationError(ShimError):
    """An Ingress TLS entry cannot be turned into a Certificate."""


class ShimConfigurationError(ShimError):
    """Issuer or challenge configuration is invalid or unavailable."""
