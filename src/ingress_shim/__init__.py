"""ingress-shim - cert-manager Certificates from annotated Ingresses."""

__version__ = "0.1.0"
