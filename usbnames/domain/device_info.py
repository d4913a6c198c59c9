"""USB device identity and resolved-name value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


MAX_USB_ID = 0xFFFF


def as_four_digit_hex(value: int) -> str:
    """Return a 16-bit ID as 4 lowercase hex digits, zero-padded."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"USB ID must be an int, got {type(value).__name__}")
    if not 0 <= value <= MAX_USB_ID:
        raise ValueError(f"USB ID out of range [0, 0xffff]: {value}")
    return f"{value:04x}"


@dataclass(frozen=True)
class DeviceIdentity:
    """Vendor/product ID pair of an enumerated USB device."""

    vendor_id: int
    product_id: int

    def __post_init__(self) -> None:
        # Validates both IDs up front.
        as_four_digit_hex(self.vendor_id)
        as_four_digit_hex(self.product_id)

    @property
    def vendor_hex(self) -> str:
        return as_four_digit_hex(self.vendor_id)

    @property
    def product_hex(self) -> str:
        return as_four_digit_hex(self.product_id)

    @classmethod
    def from_device(cls, device: Any) -> "DeviceIdentity":
        """Build an identity from a device object.

        Accepts pyusb-style devices (``idVendor``/``idProduct``) as well as
        objects exposing ``vendor_id``/``product_id``.
        """

        for vendor_attr, product_attr in (("idVendor", "idProduct"), ("vendor_id", "product_id")):
            if hasattr(device, vendor_attr) and hasattr(device, product_attr):
                return cls(getattr(device, vendor_attr), getattr(device, product_attr))
        raise ValueError(f"Object {device!r} does not expose USB vendor/product IDs")

    def __str__(self) -> str:
        return f"{self.vendor_hex}:{self.product_hex}"


@dataclass(frozen=True)
class DeviceInfo:
    """Human-readable vendor and product names of a USB device."""

    vendor: str
    product: str

    @classmethod
    def placeholder(cls, identity: DeviceIdentity) -> "DeviceInfo":
        """Default instance populated with the numeric IDs instead of names."""

        return cls(identity.vendor_hex, identity.product_hex)

    def __str__(self) -> str:
        return f"{self.vendor}:{self.product}"
