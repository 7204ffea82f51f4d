"""Streaming shell command execution with classified, colored output."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import IO, cast

from loguru import logger

from sysup.classifier import LineCategory, LineClassifier
from sysup.render import ConsoleRenderer

OUTPUT_ENCODING = "utf-8"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    DETECTED_ERROR_IN_OUTPUT = "detected_error_in_output"
    PROCESS_FAILURE = "process_failure"
    LAUNCH_FAILURE = "launch_failure"


@dataclass(frozen=True)
class CommandInvocation:
    """One shell command together with how its output is displayed."""

    command: str
    prefix: str = ""
    color: str | None = None
    stop_on_first_error: bool = False


@dataclass(frozen=True)
class ExecutionOutcome:
    """Terminal result of one invocation.

    ``exit_status`` is ``None`` only when the process never started.
    ``error_detected`` reports error-shaped output regardless of the exit status.
    """

    kind: OutcomeKind
    exit_status: int | None = None
    error_detected: bool = False
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def launch_failure(cls, detail: str) -> ExecutionOutcome:
        return cls(kind=OutcomeKind.LAUNCH_FAILURE, detail=detail)

    @classmethod
    def resolve(cls, exit_status: int, error_detected: bool) -> ExecutionOutcome:
        """Combine exit status and detected errors; a non-zero exit always wins."""
        if exit_status != 0:
            return cls(kind=OutcomeKind.PROCESS_FAILURE, exit_status=exit_status, error_detected=error_detected)
        if error_detected:
            return cls(kind=OutcomeKind.DETECTED_ERROR_IN_OUTPUT, exit_status=0, error_detected=True)
        return cls(kind=OutcomeKind.SUCCESS, exit_status=0)


class StreamingExecutor:
    """Run one shell command at a time and render its output as it arrives."""

    def __init__(
        self,
        renderer: ConsoleRenderer,
        classifier: LineClassifier | None = None,
        *,
        shell: str | None = None,
    ) -> None:
        self.renderer = renderer
        self.classifier = classifier or LineClassifier()
        self.shell = shell

    def execute(self, invocation: CommandInvocation) -> ExecutionOutcome:
        logger.debug("command.start command={}", invocation.command)
        try:
            # The command string comes from the fixed update plan.
            process = subprocess.Popen(  # noqa: S602
                invocation.command,
                shell=True,
                executable=self.shell,
                stdout=subprocess.PIPE,
                encoding=OUTPUT_ENCODING,
                errors="replace",
            )
        except OSError as exc:
            logger.debug("command.launch_failed command={} error={}", invocation.command, exc)
            self.renderer.error(f"[ERROR] Failed to execute command: {invocation.command}")
            return ExecutionOutcome.launch_failure(str(exc))

        with process:
            stdout = cast(IO[str], process.stdout)
            error_detected = self._stream(stdout, invocation)
            # Closing the read end keeps a child that is still writing from blocking forever.
            stdout.close()
            exit_status = process.wait()

        outcome = ExecutionOutcome.resolve(exit_status, error_detected)
        logger.debug(
            "command.end command={} outcome={} exit_status={}",
            invocation.command,
            outcome.kind.value,
            exit_status,
        )
        if outcome.kind is OutcomeKind.PROCESS_FAILURE:
            self.renderer.error(f"{invocation.prefix}[ERROR] Command returned code {exit_status}")
        elif outcome.kind is OutcomeKind.DETECTED_ERROR_IN_OUTPUT:
            self.renderer.error(f"{invocation.prefix}[ERROR] Detected error in command output.")
        return outcome

    def _stream(self, stream: IO[str], invocation: CommandInvocation) -> bool:
        """Render lines until the stream ends; return whether an error line was seen."""
        error_detected = False
        for raw in stream:
            classified = self.classifier.classify_output(raw)
            category = classified.category
            if category is LineCategory.IGNORABLE:
                continue
            text = f"{invocation.prefix}{classified.text}"
            if category is LineCategory.WARNING:
                self.renderer.warning(text)
            elif category is LineCategory.ERROR:
                error_detected = True
                self.renderer.error(text)
                if invocation.stop_on_first_error:
                    logger.debug("command.stopped_on_error command={}", invocation.command)
                    break
            else:
                self.renderer.line(text, invocation.color)
        return error_detected


def execute_command(
    command: str,
    prefix: str,
    color: str | None,
    stop_on_first_error: bool = False,
    *,
    renderer: ConsoleRenderer,
    classifier: LineClassifier | None = None,
) -> ExecutionOutcome:
    """Run ``command`` once with a fresh executor."""
    executor = StreamingExecutor(renderer, classifier)
    return executor.execute(CommandInvocation(command, prefix, color, stop_on_first_error))
