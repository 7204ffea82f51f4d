from __future__ import annotations

import io
from dataclasses import dataclass

import pytest

from sysup.render import ConsoleRenderer, create_renderer


@dataclass
class CapturedRenderer:
    renderer: ConsoleRenderer
    out: io.StringIO
    err: io.StringIO

    @property
    def stdout(self) -> str:
        return self.out.getvalue()

    @property
    def stderr(self) -> str:
        return self.err.getvalue()


def _capture(color: str) -> CapturedRenderer:
    out, err = io.StringIO(), io.StringIO()
    return CapturedRenderer(create_renderer(color, stdout=out, stderr=err), out, err)


@pytest.fixture
def captured() -> CapturedRenderer:
    return _capture("never")


@pytest.fixture
def captured_color() -> CapturedRenderer:
    return _capture("always")
