"""Service layer: Kubernetes resource managers and the certificate sync."""
