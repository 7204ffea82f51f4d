"""Update plans: which commands run on which platform, in which order."""

from __future__ import annotations

from dataclasses import dataclass, field

from sysup.detect import Platform
from sysup.executor import CommandInvocation

UPDATE_PREFIX = "[UPDATE] "
UPGRADE_PREFIX = "[UPGRADE] "


@dataclass(frozen=True)
class UpdateStep:
    """One executor call plus the text printed around it."""

    invocation: CommandInvocation
    banner: str | None = None
    notice: str | None = None
    failure_message: str | None = None
    simulation: bool = False


@dataclass(frozen=True)
class UpdatePlan:
    platform: Platform
    label: str
    steps: tuple[UpdateStep, ...] = field(default_factory=tuple)
    success_message: str = ""


def _termux_plan(color: str | None) -> UpdatePlan:
    return UpdatePlan(
        platform=Platform.TERMUX,
        label="Termux (Android)",
        steps=(
            UpdateStep(CommandInvocation("pkg update -y 2>&1", UPDATE_PREFIX, color), banner="UPDATE REAL"),
            UpdateStep(CommandInvocation("pkg upgrade -y 2>&1", UPGRADE_PREFIX, color), banner="UPGRADE REAL"),
        ),
        success_message="[SUCCESS] Termux update completed.",
    )


def _apt_plan(platform: Platform, color: str | None, skip_simulation: bool) -> UpdatePlan:
    steps = [
        UpdateStep(
            CommandInvocation("sudo apt-get update -s 2>&1", UPDATE_PREFIX, color, stop_on_first_error=True),
            notice="[INFO] Running dry-run simulation of update...",
            failure_message="[ERROR] Update simulation failed. Aborting.",
            simulation=True,
        ),
        UpdateStep(
            CommandInvocation("sudo apt-get upgrade -y -s 2>&1", UPGRADE_PREFIX, color, stop_on_first_error=True),
            banner="UPGRADE",
            notice="[INFO] Running dry-run simulation of upgrade...",
            failure_message="[ERROR] Upgrade simulation failed. Aborting.",
            simulation=True,
        ),
        UpdateStep(CommandInvocation("sudo apt-get update 2>&1", UPDATE_PREFIX, color), banner="UPDATE REAL"),
        UpdateStep(CommandInvocation("sudo apt-get upgrade -y 2>&1", UPGRADE_PREFIX, color), banner="UPGRADE REAL"),
    ]
    if skip_simulation:
        steps = [step for step in steps if not step.simulation]
    return UpdatePlan(
        platform=platform,
        label=f"Linux ({platform.value})",
        steps=tuple(steps),
        success_message="[SUCCESS] Ubuntu/Debian update completed.",
    )


def build_plan(platform: Platform, *, color: str | None = None, skip_simulation: bool = False) -> UpdatePlan:
    """Return the ordered update steps for ``platform``."""
    if platform is Platform.TERMUX:
        return _termux_plan(color)
    return _apt_plan(platform, color, skip_simulation)
