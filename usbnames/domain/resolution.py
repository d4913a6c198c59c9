"""Outcome types for a vendor/product name lookup.

A lookup either yields a fully populated DeviceInfo or a tagged failure;
there is no half-filled result in between.

Usage:
    from usbnames.domain.resolution import FailureReason

    result = resolver.resolve_sync(0x0403, 0x6001)
    if result.ok:
        print(result.info)
    elif result.reason is FailureReason.NETWORK_ERROR:
        print("usb-ids is unreachable")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from usbnames.domain.device_info import DeviceIdentity, DeviceInfo
from usbnames.errors import USBNamesError


class FailureReason(Enum):
    """Why a lookup produced no DeviceInfo."""
    NETWORK_ERROR = "network_error"
    PARSE_MISS = "parse_miss"
    PARTIAL_RESOLUTION = "partial_resolution"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class Resolved:
    """Both names were found."""
    identity: DeviceIdentity
    info: DeviceInfo

    @property
    def ok(self) -> bool:
        return True

    def info_or_none(self) -> Optional[DeviceInfo]:
        return self.info


@dataclass(frozen=True)
class NotFound:
    """No DeviceInfo could be built; ``error`` holds the diagnostic detail."""
    identity: DeviceIdentity
    reason: FailureReason
    error: USBNamesError

    @property
    def ok(self) -> bool:
        return False

    def info_or_none(self) -> Optional[DeviceInfo]:
        return None

    def describe(self) -> str:
        """Return a one-line summary for logs and CLI output."""

        return f"{self.identity}: {self.reason.value} ({self.error.error_code}: {self.error})"


Resolution = Union[Resolved, NotFound]
