"""HTTP access to the usb-ids web database.

This module keeps all usb-ids HTTP details in one place: URL layout,
timeouts, headers and the mapping of transport failures onto NetworkError.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

import requests

from usbnames.config import Config
from usbnames.domain.device_info import DeviceIdentity
from usbnames.domain.name_parser import extract_name, extract_name_from_markup, split_lines
from usbnames.errors import NetworkError


logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class UsbIdsClient:
    """Fetches usb-ids pages and pulls the name field out of them.

    One client wraps one ``requests.Session``; use it as a context manager so
    the connection is released when the lookup is done.
    """

    def __init__(self, config: Config, session_factory: Optional[SessionFactory] = None):
        self.config = config
        self._session = (session_factory or requests.Session)()
        self._session.headers.update({"User-Agent": config.user_agent})

    def __enter__(self) -> "UsbIdsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def vendor_url(self, identity: DeviceIdentity) -> str:
        return f"{self.config.base_url}/{identity.vendor_hex}"

    def product_url(self, identity: DeviceIdentity) -> str:
        return f"{self.vendor_url(identity)}/{identity.product_hex}"

    def fetch_text(self, url: str) -> str:
        """GET ``url`` and return the decoded body.

        Raises:
            NetworkError: on connection failure, timeout or non-2xx status.
        """

        logger.debug("GET %s", url)
        try:
            with self._session.get(url, timeout=self.config.timeout) as resp:
                if not 200 <= resp.status_code < 300:
                    raise NetworkError(
                        f"usb-ids HTTP {resp.status_code} for {url}",
                        url=url,
                        status_code=resp.status_code,
                    )
                return resp.text
        except requests.Timeout as exc:
            raise NetworkError(
                f"usb-ids request to {url} timed out after {self.config.timeout}s. "
                "Increase USB_IDS_CONNECT_TIMEOUT_SEC or USB_IDS_READ_TIMEOUT_SEC.",
                url=url,
            ) from exc
        except requests.ConnectionError as exc:
            raise NetworkError(f"usb-ids is not reachable at {url}: {exc}", url=url) from exc
        except requests.RequestException as exc:
            raise NetworkError(f"usb-ids request to {url} failed: {exc}", url=url) from exc

    def fetch_lines(self, url: str) -> Iterator[str]:
        """Return the body of ``url`` as text lines."""

        return iter(split_lines(self.fetch_text(url)))

    def fetch_name(self, url: str) -> str:
        """Fetch ``url`` and extract its "Name:" field.

        Raises:
            NetworkError: the page could not be fetched.
            ParseMiss: the page has no usable name.
        """

        if self.config.parser == "markup":
            return extract_name_from_markup(self.fetch_text(url), url=url)
        return extract_name(self.fetch_lines(url), url=url)
