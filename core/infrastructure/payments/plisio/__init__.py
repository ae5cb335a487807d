"""Plisio crypto invoicing adapter."""

from .client import PlisioClient
from .mapper import PlisioMapper
from .signature import compute_signature, verify_signature

__all__ = ["PlisioClient", "PlisioMapper", "compute_signature", "verify_signature"]
