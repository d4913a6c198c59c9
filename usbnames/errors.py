"""Structured error taxonomy for USB name lookups.

Lookup failures fall into two families, so callers can tell an unreachable
database apart from a page that simply carries no name.

Usage:
    from usbnames.errors import NetworkError, ParseMiss

    try:
        name = client.fetch_name(url)
    except NetworkError:
        show_offline_hint()
    except ParseMiss:
        show_unknown_device()
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass
class ErrorContext:
    """Contextual metadata for errors."""
    url: Optional[str] = None
    vendor_id: Optional[int] = None
    product_id: Optional[int] = None
    stage: Optional[str] = None  # vendor, product
    severity: str = "error"  # warning, error
    recoverable: bool = True

class USBNamesError(Exception):
    """Base class for all usbnames errors."""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.context = context or ErrorContext()
        self.error_code = "GENERIC_ERROR"

# --- Infrastructure Errors (HTTP transport) ---

class InfrastructureError(USBNamesError):
    """Base for transport errors."""
    pass

class NetworkError(InfrastructureError):
    """Connection failure, timeout or non-2xx response."""
    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, context)
        self.error_code = "NETWORK_ERROR"
        self.url = url
        self.status_code = status_code
        if self.context.url is None:
            self.context.url = url

# --- Domain Errors (page content) ---

class DomainError(USBNamesError):
    """Base for errors about the content of a usb-ids page."""
    pass

class ParseMiss(DomainError):
    """Page received but no usable "Name:" field was found."""
    def __init__(self, message: str, url: Optional[str] = None, context: Optional[ErrorContext] = None):
        super().__init__(message, context)
        self.error_code = "PARSE_MISS"
        self.url = url
        self.context.severity = "warning"
        if self.context.url is None:
            self.context.url = url

class PartialResolution(DomainError):
    """Vendor name resolved but the product lookup failed."""
    def __init__(
        self,
        message: str,
        vendor_name: str,
        cause: USBNamesError,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, context or cause.context)
        self.error_code = "PARTIAL_RESOLUTION"
        self.vendor_name = vendor_name
        self.cause = cause
