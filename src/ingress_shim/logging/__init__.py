"""Logging configuration for ingress_shim."""

from ingress_shim.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
