"""sysup - keep the host's packages current."""

from .classifier import LineCategory, classify_line
from .executor import CommandInvocation, ExecutionOutcome, OutcomeKind, StreamingExecutor, execute_command

__version__ = "0.1.0"

__all__ = [
    "CommandInvocation",
    "ExecutionOutcome",
    "LineCategory",
    "OutcomeKind",
    "StreamingExecutor",
    "classify_line",
    "execute_command",
]
