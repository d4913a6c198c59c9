"""Configuration helpers for usb-ids lookups.

This module centralizes environment-driven settings so the resolver and the
command-line helper read them the same way.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import find_dotenv, load_dotenv


DEFAULT_BASE_URL = "http://usb-ids.gowdy.us/read/UD"
PARSER_MODES = ("lines", "markup")


@dataclass
class Config:
    """Runtime configuration values loaded from environment variables."""

    base_url: str = DEFAULT_BASE_URL
    connect_timeout_sec: float = 5.0
    read_timeout_sec: float = 30.0
    max_workers: int = 4
    user_agent: str = "usbnames/0.1"
    parser: str = "lines"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.parser not in PARSER_MODES:
            raise ValueError(
                f"Unknown parser '{self.parser}'. Expected one of: {', '.join(PARSER_MODES)}"
            )
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @property
    def timeout(self) -> Tuple[float, float]:
        """(connect, read) timeout tuple in the form requests expects."""

        return (self.connect_timeout_sec, self.read_timeout_sec)


def load_env_file() -> bool:
    """Copy a .env file from the working directory into os.environ.

    Existing variables win. Only the command-line entry point calls this;
    library use never touches the process environment.
    """

    return load_dotenv(find_dotenv(usecwd=True))


def load_config() -> Config:
    """Load configuration from environment variables with safe defaults."""

    return Config(
        base_url=os.getenv("USB_IDS_BASE_URL", DEFAULT_BASE_URL),
        connect_timeout_sec=float(os.getenv("USB_IDS_CONNECT_TIMEOUT_SEC", "5")),
        read_timeout_sec=float(os.getenv("USB_IDS_READ_TIMEOUT_SEC", "30")),
        max_workers=int(os.getenv("USB_IDS_MAX_WORKERS", "4")),
        user_agent=os.getenv("USB_IDS_USER_AGENT", "usbnames/0.1"),
        parser=os.getenv("USB_IDS_PARSER", "lines").strip().lower(),
        log_level=os.getenv("USB_IDS_LOG_LEVEL", "WARNING").upper(),
    )
