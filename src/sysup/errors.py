"""Application-level exception types for sysup."""

from __future__ import annotations


class SysupError(Exception):
    """Base exception for sysup."""


class UnsupportedPlatformError(SysupError):
    """Raised when the host operating system is not supported or not detected."""


class UnsupportedDistributionError(UnsupportedPlatformError):
    """Raised when a Linux host runs a distribution other than Ubuntu or Debian."""

    def __init__(self, distro: str | None = None) -> None:
        self.distro = distro
        super().__init__(f"unsupported linux distribution: {distro or 'unknown'}")
