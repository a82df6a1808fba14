"""Kubernetes resource managers used by the certificate sync."""

from ingress_shim.services.kubernetes.certmanager_manager import CertManagerManager
from ingress_shim.services.kubernetes.event_recorder import EVENT_TYPE_NORMAL, EventRecorder
from ingress_shim.services.kubernetes.ingress_manager import IngressManager

__all__ = [
    "EVENT_TYPE_NORMAL",
    "CertManagerManager",
    "EventRecorder",
    "IngressManager",
]
