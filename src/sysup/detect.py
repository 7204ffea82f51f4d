"""Host platform and distribution detection."""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from loguru import logger

from sysup.errors import UnsupportedDistributionError, UnsupportedPlatformError

OS_RELEASE_PATH = Path("/etc/os-release")
TERMUX_MARKER = "com.termux"
SUPPORTED_DISTROS = ("ubuntu", "debian")


class Platform(str, Enum):
    TERMUX = "termux"
    UBUNTU = "ubuntu"
    DEBIAN = "debian"


def is_termux(environ: Mapping[str, str] | None = None) -> bool:
    """Termux sets PREFIX to a path inside its application directory."""
    env = os.environ if environ is None else environ
    return TERMUX_MARKER in env.get("PREFIX", "")


def detect_linux_distro(os_release_path: Path = OS_RELEASE_PATH) -> str | None:
    """Return ``ubuntu`` or ``debian`` from os-release, or None."""
    try:
        content = os_release_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.debug("platform.os_release_unreadable path={}", os_release_path)
        return None

    for line in content.splitlines():
        for distro in SUPPORTED_DISTROS:
            if f"ID={distro}" in line:
                return distro
    return None


def detect_platform(
    environ: Mapping[str, str] | None = None,
    system: str | None = None,
    os_release_path: Path = OS_RELEASE_PATH,
) -> Platform:
    """Detect which supported platform this process runs on.

    Raises:
        UnsupportedDistributionError: Linux, but neither Ubuntu nor Debian.
        UnsupportedPlatformError: any other operating system.
    """
    if is_termux(environ):
        logger.debug("platform.detected platform={}", Platform.TERMUX.value)
        return Platform.TERMUX

    system_name = (system if system is not None else platform.system()).lower()
    if system_name != "linux":
        raise UnsupportedPlatformError(f"unsupported operating system: {system_name or 'unknown'}")

    distro = detect_linux_distro(os_release_path)
    if distro is None:
        raise UnsupportedDistributionError()
    logger.debug("platform.detected platform={}", distro)
    return Platform(distro)
