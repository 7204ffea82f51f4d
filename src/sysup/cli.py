"""sysup command-line entry point."""

from __future__ import annotations

from typing import NoReturn

import typer
from loguru import logger
from pydantic import ValidationError

from sysup.classifier import LineClassifier
from sysup.config import load_settings
from sysup.detect import detect_platform
from sysup.errors import UnsupportedDistributionError, UnsupportedPlatformError
from sysup.executor import StreamingExecutor
from sysup.logging_utils import configure_logging
from sysup.render import ConsoleRenderer, create_renderer
from sysup.runner import UpdateRunner
from sysup.steps import build_plan

app = typer.Typer(
    name="sysup",
    help="Update the host system through its native package manager.",
    add_completion=False,
)


def _exit_with_error() -> NoReturn:
    raise typer.Exit(1)


def _report_unsupported(renderer: ConsoleRenderer, exc: UnsupportedPlatformError) -> None:
    logger.info("platform.unsupported error={}", exc)
    if isinstance(exc, UnsupportedDistributionError):
        renderer.error("[ERROR] Unsupported Linux distribution: only Ubuntu or Debian are supported.")
    else:
        renderer.error("[ERROR] Unsupported or undetected operating system.")


def _report_invalid_settings(exc: ValidationError) -> None:
    renderer = create_renderer()
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        renderer.error(f"[ERROR] Invalid setting SYSUP_{field.upper()}: {error['msg']}")


@app.command()
def main() -> None:
    """Refresh package indices, then upgrade installed packages."""

    try:
        settings = load_settings()
    except ValidationError as exc:
        _report_invalid_settings(exc)
        _exit_with_error()
    configure_logging(settings.log_level)
    renderer = create_renderer(settings.color)

    try:
        platform = detect_platform()
    except UnsupportedPlatformError as exc:
        _report_unsupported(renderer, exc)
        _exit_with_error()

    plan = build_plan(platform, color=renderer.palette.log, skip_simulation=settings.skip_simulation)
    classifier = LineClassifier.with_extra_prefixes(settings.extra_ignore_prefixes)
    runner = UpdateRunner(StreamingExecutor(renderer, classifier), renderer)
    if not runner.run(plan):
        _exit_with_error()
