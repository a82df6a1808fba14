"""Cert-manager resource manager.

Reads Certificates, Issuers and ClusterIssuers and creates Certificates
through the Kubernetes ``CustomObjectsApi``.
"""

from __future__ import annotations

from ingress_shim.integrations.kubernetes.models.certmanager import (
    CERT_MANAGER_GROUP,
    CERT_MANAGER_VERSION,
    Certificate,
    GenericIssuer,
    IssuerKind,
)
from ingress_shim.services.kubernetes.base import K8sBaseManager

CERTIFICATE_PLURAL = "certificates"
ISSUER_PLURAL = "issuers"
CLUSTER_ISSUER_PLURAL = "clusterissuers"


class CertManagerManager(K8sBaseManager):
    """Manager for cert-manager resources."""

    _entity_name = "certmanager"

    # =========================================================================
    # Certificate Operations
    # =========================================================================

    def get_certificate(self, name: str, namespace: str | None = None) -> Certificate:
        """Get a Certificate by name.

        Raises:
            KubernetesNotFoundError: If no such Certificate exists.
        """
        ns = self._resolve_namespace(namespace)
        self._log.debug("getting_certificate", name=name, namespace=ns)
        result = self._read(
            self._client.custom_objects.get_namespaced_custom_object,
            CERT_MANAGER_GROUP,
            CERT_MANAGER_VERSION,
            ns,
            CERTIFICATE_PLURAL,
            name,
            resource_type="Certificate",
            resource_name=name,
            namespace=ns,
        )
        return Certificate.from_k8s_object(result)

    def create_certificate(self, certificate: Certificate) -> Certificate:
        """Create a Certificate.

        Not retried. A name collision surfaces as
        :class:`KubernetesConflictError`.

        Args:
            certificate: The Certificate to create. Its namespace must be set.

        Returns:
            The Certificate as stored by the API server.
        """
        ns = self._resolve_namespace(certificate.namespace)
        self._log.debug("creating_certificate", name=certificate.name, namespace=ns)
        body = certificate.to_k8s_object()
        body["metadata"]["namespace"] = ns
        try:
            result = self._client.custom_objects.create_namespaced_custom_object(
                CERT_MANAGER_GROUP,
                CERT_MANAGER_VERSION,
                ns,
                CERTIFICATE_PLURAL,
                body,
                _request_timeout=self._client.timeout,
            )
        except Exception as e:
            self._handle_api_error(e, "Certificate", certificate.name, ns)
        self._log.info("created_certificate", name=certificate.name, namespace=ns)
        return Certificate.from_k8s_object(result)

    # =========================================================================
    # Issuer Operations
    # =========================================================================

    def get_issuer(self, name: str, namespace: str | None = None) -> GenericIssuer:
        """Get a namespaced Issuer by name.

        Raises:
            KubernetesNotFoundError: If no such Issuer exists.
        """
        ns = self._resolve_namespace(namespace)
        self._log.debug("getting_issuer", name=name, namespace=ns)
        result = self._read(
            self._client.custom_objects.get_namespaced_custom_object,
            CERT_MANAGER_GROUP,
            CERT_MANAGER_VERSION,
            ns,
            ISSUER_PLURAL,
            name,
            resource_type="Issuer",
            resource_name=name,
            namespace=ns,
        )
        return GenericIssuer.from_k8s_object(result, kind=IssuerKind.ISSUER)

    def get_cluster_issuer(self, name: str) -> GenericIssuer:
        """Get a ClusterIssuer by name.

        Raises:
            KubernetesNotFoundError: If no such ClusterIssuer exists.
        """
        self._log.debug("getting_cluster_issuer", name=name)
        result = self._read(
            self._client.custom_objects.get_cluster_custom_object,
            CERT_MANAGER_GROUP,
            CERT_MANAGER_VERSION,
            CLUSTER_ISSUER_PLURAL,
            name,
            resource_type="ClusterIssuer",
            resource_name=name,
        )
        return GenericIssuer.from_k8s_object(result, kind=IssuerKind.CLUSTER_ISSUER)
