"""Package-manager output line classification."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class LineCategory(str, Enum):
    IGNORABLE = "ignorable"
    WARNING = "warning"
    ERROR = "error"
    NORMAL = "normal"


LinePredicate: TypeAlias = Callable[[str], bool]
ClassificationRule: TypeAlias = tuple[LinePredicate, LineCategory]

# apt progress markers; matched at line start only.
IGNORABLE_PREFIXES: tuple[str, ...] = (
    "Hit:",
    "Ign:",
    "Get:",
    "Reading package lists",
    "Building dependency tree",
    "Reading state information",
    "Waiting for headers",
)
UNSTABLE_CLI_NOTICE = "WARNING: apt does not have a stable CLI interface."
WARNING_MARKERS: tuple[str, ...] = ("warning", "Warning")
ERROR_MARKERS: tuple[str, ...] = ("error", "Error", "failed", "Failed")
FATAL_PREFIX = "E:"


@dataclass(frozen=True)
class ClassifiedLine:
    """One output line with its category."""

    category: LineCategory
    text: str


def strip_line_ending(raw: str) -> str:
    """Drop trailing newline and carriage-return characters only."""

    return raw.rstrip("\r\n")


def _is_empty(line: str) -> bool:
    return not line


def _starts_with_any(prefixes: Sequence[str]) -> LinePredicate:
    frozen = tuple(prefixes)

    def predicate(line: str) -> bool:
        return line.startswith(frozen)

    return predicate


def _contains_any(markers: Sequence[str]) -> LinePredicate:
    frozen = tuple(markers)

    def predicate(line: str) -> bool:
        return any(marker in line for marker in frozen)

    return predicate


def _is_error(line: str) -> bool:
    return line.startswith(FATAL_PREFIX) or any(marker in line for marker in ERROR_MARKERS)


def build_rules(extra_ignore_prefixes: Iterable[str] = ()) -> tuple[ClassificationRule, ...]:
    """Build the ordered rule table; prefix rules always come before substring rules."""

    prefixes = IGNORABLE_PREFIXES + tuple(prefix for prefix in extra_ignore_prefixes if prefix)
    return (
        (_is_empty, LineCategory.IGNORABLE),
        (_starts_with_any(prefixes), LineCategory.IGNORABLE),
        (_contains_any((UNSTABLE_CLI_NOTICE,)), LineCategory.WARNING),
        (_contains_any(WARNING_MARKERS), LineCategory.WARNING),
        (_is_error, LineCategory.ERROR),
    )


DEFAULT_RULES = build_rules()


class LineClassifier:
    """First-match classifier over an ordered rule table."""

    def __init__(self, rules: Sequence[ClassificationRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    @classmethod
    def with_extra_prefixes(cls, prefixes: Iterable[str]) -> LineClassifier:
        return cls(build_rules(prefixes))

    @property
    def rules(self) -> tuple[ClassificationRule, ...]:
        return self._rules

    def classify(self, line: str) -> LineCategory:
        for predicate, category in self._rules:
            if predicate(line):
                return category
        return LineCategory.NORMAL

    def classify_output(self, raw: str) -> ClassifiedLine:
        text = strip_line_ending(raw)
        return ClassifiedLine(category=self.classify(text), text=text)


_DEFAULT_CLASSIFIER = LineClassifier()


def classify_line(line: str) -> LineCategory:
    """Classify one line that has already had its line ending removed."""

    return _DEFAULT_CLASSIFIER.classify(line)


def classify_output_line(raw: str) -> ClassifiedLine:
    """Strip the line ending from ``raw`` and classify what remains."""

    return _DEFAULT_CLASSIFIER.classify_output(raw)
