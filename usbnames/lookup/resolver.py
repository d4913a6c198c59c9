"""Vendor/product name resolution against usb-ids.

Usage:
    from usbnames.lookup.resolver import DeviceNameResolver

    with DeviceNameResolver() as resolver:
        result = resolver.resolve_sync(0x0403, 0x6001)
        print(result.info_or_none())

        # Off the calling thread, with the callback marshalled onto an
        # asyncio loop:
        resolver.resolve_async(
            0x0403,
            0x6001,
            on_success=show_names,
            on_failure=show_ids,
            notify=loop.call_soon_threadsafe,
        )
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Optional

from usbnames.config import Config, load_config
from usbnames.domain.device_info import DeviceIdentity, DeviceInfo
from usbnames.domain.resolution import FailureReason, NotFound, Resolution, Resolved
from usbnames.errors import DomainError, ErrorContext, PartialResolution, USBNamesError
from usbnames.lookup.usb_ids_client import SessionFactory, UsbIdsClient


logger = logging.getLogger(__name__)

SuccessCallback = Callable[[DeviceIdentity, DeviceInfo], Any]
FailureCallback = Callable[[DeviceIdentity, NotFound], Any]
Notifier = Callable[[Callable[[], None]], Any]


class DeviceNameResolver:
    """Resolve USB IDs to names through two usb-ids page fetches.

    Resolutions share nothing but the thread pool: every call opens its own
    HTTP session, so concurrent lookups never contend.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session_factory: Optional[SessionFactory] = None,
    ):
        """Initialize the resolver.

        Args:
            config: Lookup settings; read from the environment when omitted.
            session_factory: Builds the ``requests.Session`` for each lookup.
        """
        self.config = config or load_config()
        self._session_factory = session_factory
        self._executor: Optional[ThreadPoolExecutor] = None
        self._closed = False
        self._lock = threading.Lock()

    def __enter__(self) -> "DeviceNameResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the background pool, waiting for running lookups.

        resolve_sync keeps working afterwards; resolve_async raises
        RuntimeError.
        """

        with self._lock:
            self._closed = True
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def resolve_sync(self, vendor_id: int, product_id: int) -> Resolution:
        """Look up both names on the calling thread.

        Blocks for up to two HTTP round trips; keep it off latency-sensitive
        threads. Lookup failures come back as NotFound and are logged, never
        raised. Out-of-range IDs raise ValueError.
        """

        identity = DeviceIdentity(vendor_id, product_id)
        with UsbIdsClient(self.config, self._session_factory) as client:
            try:
                vendor = client.fetch_name(client.vendor_url(identity))
            except USBNamesError as exc:
                self._annotate(exc, identity, "vendor")
                return self._failed(identity, self._reason_for(exc), exc)

            try:
                product = client.fetch_name(client.product_url(identity))
            except USBNamesError as exc:
                self._annotate(exc, identity, "product")
                partial_error = PartialResolution(
                    f"Vendor '{vendor}' resolved but product lookup failed: {exc}",
                    vendor_name=vendor,
                    cause=exc,
                )
                return self._failed(identity, FailureReason.PARTIAL_RESOLUTION, partial_error)

        info = DeviceInfo(vendor, product)
        logger.info("Resolved %s to %s", identity, info)
        return Resolved(identity, info)

    def resolve_device(self, device: Any) -> Resolution:
        """Resolve an enumerated device object (pyusb style or similar)."""

        identity = DeviceIdentity.from_device(device)
        return self.resolve_sync(identity.vendor_id, identity.product_id)

    def resolve_async(
        self,
        vendor_id: int,
        product_id: int,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        notify: Optional[Notifier] = None,
    ) -> "Future[Resolution]":
        """Schedule resolve_sync in the background.

        Exactly one of ``on_success(identity, info)`` or
        ``on_failure(identity, not_found)`` is invoked once the lookup ends.
        When ``notify`` is given the callback is handed to it (for example
        ``loop.call_soon_threadsafe``) instead of running on the worker
        thread. Lookups cannot be cancelled once scheduled.

        Anything unexpected raised by the lookup is logged and reported to
        ``on_failure`` as UNEXPECTED_ERROR. A notifier that raises is logged
        and the callback is dropped.
        """

        identity = DeviceIdentity(vendor_id, product_id)

        def _run() -> Resolution:
            try:
                result = self.resolve_sync(identity.vendor_id, identity.product_id)
            except Exception as exc:
                logger.exception("Unexpected lookup failure for %s", identity)
                result = self._unexpected(identity, exc)
            if isinstance(result, Resolved):
                callback = partial(self._deliver, on_success, identity, result.info)
            else:
                callback = partial(self._deliver, on_failure, identity, result)
            if notify is None:
                callback()
                return result
            try:
                notify(callback)
            except Exception:
                logger.exception("Notifier %r rejected the result for %s", notify, identity)
            return result

        return self._get_executor().submit(_run)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._closed:
                raise RuntimeError("DeviceNameResolver is closed")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix="usbnames",
                )
            return self._executor

    @staticmethod
    def _deliver(callback: Callable[..., Any], identity: DeviceIdentity, payload: Any) -> None:
        try:
            callback(identity, payload)
        except Exception:
            logger.exception("Callback %r failed for %s", callback, identity)

    @staticmethod
    def _annotate(exc: USBNamesError, identity: DeviceIdentity, stage: str) -> None:
        exc.context.vendor_id = identity.vendor_id
        exc.context.product_id = identity.product_id
        exc.context.stage = stage

    @staticmethod
    def _reason_for(exc: USBNamesError) -> FailureReason:
        if isinstance(exc, DomainError):
            return FailureReason.PARSE_MISS
        return FailureReason.NETWORK_ERROR

    @staticmethod
    def _unexpected(identity: DeviceIdentity, exc: Exception) -> NotFound:
        error = USBNamesError(
            f"Unexpected lookup failure: {exc!r}",
            ErrorContext(vendor_id=identity.vendor_id, product_id=identity.product_id),
        )
        error.__cause__ = exc
        return NotFound(identity, FailureReason.UNEXPECTED_ERROR, error)

    @staticmethod
    def _failed(identity: DeviceIdentity, reason: FailureReason, error: USBNamesError) -> NotFound:
        result = NotFound(identity, reason, error)
        logger.warning("Lookup failed for %s", result.describe())
        return result
