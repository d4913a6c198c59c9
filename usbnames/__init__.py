"""Resolve USB vendor/product IDs to names via the usb-ids web database."""

from usbnames.domain.device_info import DeviceIdentity, DeviceInfo, as_four_digit_hex
from usbnames.domain.resolution import FailureReason, NotFound, Resolution, Resolved
from usbnames.lookup.resolver import DeviceNameResolver

__all__ = [
    "DeviceIdentity",
    "DeviceInfo",
    "DeviceNameResolver",
    "FailureReason",
    "NotFound",
    "Resolution",
    "Resolved",
    "as_four_digit_hex",
]
