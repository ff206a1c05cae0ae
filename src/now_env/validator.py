"""
Chained assertions over a set of required environment variables.

Every assertion is a full pass over the bound names. Failures from one pass are
collected and raised together as a single ValidationError, so a chain such as
``required(["A", "B"]).not_empty().allowed_values(["x"])`` stops at the first
pass that reports anything.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from .exceptions import CallbackError, ValidationError, ValidationFailure
from .loader import Loader

logger = logging.getLogger(__name__)

Predicate = Callable[[Optional[str]], object]

BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0", "yes", "no", "on", "off"})
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Assertion:
    """A predicate over a single variable value and the reason reported when it fails."""

    predicate: Predicate
    reason: str = "failed callback assertion"


def _is_present(value: Optional[str]) -> bool:
    return value is not None


def _is_not_empty(value: Optional[str]) -> bool:
    return len((value or "").strip()) > 0


def _is_integer(value: Optional[str]) -> bool:
    return value is not None and _DIGITS.fullmatch(value) is not None


def _is_boolean(value: Optional[str]) -> bool:
    if value is None or value == "":
        return False
    return value.lower() in BOOLEAN_STRINGS


PRESENT = Assertion(_is_present, "is missing")
NOT_EMPTY = Assertion(_is_not_empty, "is empty")
INTEGER = Assertion(_is_integer, "is not an integer")
BOOLEAN = Assertion(_is_boolean, "is not a boolean")


def allowed(choices: str | Iterable[str]) -> Assertion:
    permitted = [choices] if isinstance(choices, str) else list(choices)
    return Assertion(lambda value: value in permitted, "is not an allowed value")


def custom(predicate: Predicate, reason: str = "failed callback assertion") -> Assertion:
    return Assertion(predicate, reason)


class Validator:
    """Binds a list of variable names to a loader; presence is checked on construction."""

    def __init__(self, names: Sequence[str], loader: Loader):
        self.names = list(names)
        self.loader = loader
        self.check(PRESENT)

    def check(self, assertion: Assertion) -> "Validator":
        if not callable(assertion.predicate):
            raise CallbackError("The provided callback must be callable.")

        failures: List[ValidationFailure] = []
        for name in self.names:
            value = self.loader.get_environment_variable(name)
            if not assertion.predicate(value):
                failures.append(ValidationFailure(name, assertion.reason))

        if failures:
            logger.debug("%d variable(s) %s", len(failures), assertion.reason)
            raise ValidationError(failures)
        return self

    def assert_callback(
        self, predicate: Predicate, reason: str = "failed callback assertion"
    ) -> "Validator":
        return self.check(custom(predicate, reason))

    def not_empty(self) -> "Validator":
        return self.check(NOT_EMPTY)

    def is_integer(self) -> "Validator":
        return self.check(INTEGER)

    def is_boolean(self) -> "Validator":
        return self.check(BOOLEAN)

    def allowed_values(self, choices: str | Iterable[str]) -> "Validator":
        return self.check(allowed(choices))


__all__ = [
    "Assertion",
    "BOOLEAN",
    "BOOLEAN_STRINGS",
    "INTEGER",
    "NOT_EMPTY",
    "PRESENT",
    "Validator",
    "allowed",
    "custom",
]
