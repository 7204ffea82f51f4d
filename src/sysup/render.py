"""Console renderer for sysup."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.color import ColorSystem
from rich.console import Console

SEPARATOR_WIDTH = 50
_COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass(frozen=True)
class Palette:
    """Semantic colors, as rich style names."""

    info: str = "yellow"
    log: str = "green"
    error: str = "red"
    warning: str = "bright_black"


DEFAULT_PALETTE = Palette()


class ConsoleRenderer:
    """Writes whole colored lines to the informational and error streams."""

    def __init__(self, stdout: Console, stderr: Console, palette: Palette = DEFAULT_PALETTE) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.palette = palette
        self._print_lock = threading.Lock()

    def line(self, text: str, color: str | None = None) -> None:
        """Render one line in the caller's color on the standard stream."""
        self._print(self.stdout, text, color or self.palette.log)

    def info(self, text: str) -> None:
        self._print(self.stdout, text, self.palette.info)

    def warning(self, text: str) -> None:
        self._print(self.stdout, text, self.palette.warning)

    def error(self, text: str) -> None:
        self._print(self.stderr, text, self.palette.error)

    def separator(self, title: str) -> None:
        """Render a section banner: rule, bracketed title, rule."""
        rule = "=" * SEPARATOR_WIDTH
        self._print(self.stdout, f"{rule}\n[ {title} ]\n{rule}", self.palette.info)

    def _print(self, console: Console, text: str, style: str) -> None:
        # Written verbatim: no tab expansion, no control-code stripping.
        rendered = _style_text(console, text, style)
        with self._print_lock:
            console.file.write(f"{rendered}\n")
            console.file.flush()


def _style_text(console: Console, text: str, style: str) -> str:
    color_system = _COLOR_SYSTEMS.get(console.color_system or "")
    if color_system is None or console.no_color:
        return text
    return console.get_style(style).render(text, color_system=color_system)


def _build_console(file: TextIO | None, mode: ColorMode) -> Console:
    if mode is ColorMode.ALWAYS:
        return Console(file=file, force_terminal=True, no_color=False, color_system="standard", highlight=False)
    if mode is ColorMode.NEVER:
        return Console(file=file, no_color=True, color_system=None, highlight=False)
    return Console(file=file, highlight=False)


def create_renderer(
    color: ColorMode | str = ColorMode.AUTO,
    palette: Palette = DEFAULT_PALETTE,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> ConsoleRenderer:
    """Create a renderer whose consoles follow the requested color mode."""
    mode = ColorMode(color)
    return ConsoleRenderer(
        _build_console(sys.stdout if stdout is None else stdout, mode),
        _build_console(sys.stderr if stderr is None else stderr, mode),
        palette,
    )
