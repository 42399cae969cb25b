"""Resilient version comparison and range evaluation.

Version labels come from upstream template authors and are not guaranteed
to be semantic versions.  Labels are split on any non-alphanumeric run and
compared token by token:

* numeric tokens compare as integers,
* non-numeric tokens compare lexically,
* a numeric token sorts above a non-numeric one at the same position,
* a missing token (shorter label) sorts below any present token.

Nothing in this module raises on a malformed *label*; only range
expressions are parsed strictly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from catalog_service.models.errors import ParseError

_SEPARATOR_RE = re.compile(r"[^0-9A-Za-z]+")
_CLAUSE_SPLIT_RE = re.compile(r"[\s,]+")
_CLAUSE_RE = re.compile(r"^(>=|<=|!=|==|=|>|<)?(.*)$")
_OPERAND_RE = re.compile(r"^[0-9A-Za-z][0-9A-Za-z.\-+_~]*$")
_OPERATOR_CHARS = frozenset("<>=!~^")

# Sort keys per token kind: missing < non-numeric < numeric.
_MISSING = (0, 0, "")


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _tokens(label: str) -> list[str]:
    label = label.strip()
    if len(label) > 1 and label[0] in "vV" and label[1].isdigit():
        label = label[1:]
    return [t for t in _SEPARATOR_RE.split(label) if t]


def _token_key(token: str) -> tuple[int, int, str]:
    if token.isdigit():
        return (2, int(token), "")
    return (1, 0, token)


def compare(a: str, b: str) -> Ordering:
    """Compare two version labels token by token."""
    left = [_token_key(t) for t in _tokens(a or "")]
    right = [_token_key(t) for t in _tokens(b or "")]
    width = max(len(left), len(right))
    left += [_MISSING] * (width - len(left))
    right += [_MISSING] * (width - len(right))
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


def greater_than(a: str, b: str) -> bool:
    return compare(a, b) is Ordering.GREATER


def between(minimum: str | None, value: str, maximum: str | None) -> bool:
    """True when *value* lies in the inclusive range; empty bounds are open."""
    if minimum and compare(value, minimum) is Ordering.LESS:
        return False
    if maximum and compare(value, maximum) is Ordering.GREATER:
        return False
    return True


# ---------------------------------------------------------------------------
# Range expressions
# ---------------------------------------------------------------------------

_OPERATORS: dict[str, frozenset[Ordering]] = {
    ">=": frozenset({Ordering.GREATER, Ordering.EQUAL}),
    "<=": frozenset({Ordering.LESS, Ordering.EQUAL}),
    ">": frozenset({Ordering.GREATER}),
    "<": frozenset({Ordering.LESS}),
    "=": frozenset({Ordering.EQUAL}),
    "==": frozenset({Ordering.EQUAL}),
    "!=": frozenset({Ordering.LESS, Ordering.GREATER}),
}


@dataclass(frozen=True)
class Clause:
    """A single ``<operator><version>`` constraint."""

    operator: str
    version: str

    def matches(self, value: str) -> bool:
        return compare(value, self.version) in _OPERATORS[self.operator]


@dataclass(frozen=True)
class VersionRange:
    """Parsed range: alternatives (``||``) of clause conjunctions."""

    expression: str
    alternatives: tuple[tuple[Clause, ...], ...]

    def contains(self, value: str) -> bool:
        return any(all(c.matches(value) for c in group) for group in self.alternatives)


def _parse_group(group: str, expression: str) -> tuple[Clause, ...]:
    raw = [t for t in _CLAUSE_SPLIT_RE.split(group.strip()) if t]
    if not raw:
        raise ParseError(f"Empty clause group in range '{expression}'", expression)

    # Re-attach operands separated from their operator by whitespace (">= 1.2").
    pieces: list[str] = []
    pending = ""
    for token in raw:
        if token in _OPERATORS:
            if pending:
                raise ParseError(f"Missing operand after '{pending}' in '{expression}'", expression)
            pending = token
            continue
        pieces.append(pending + token)
        pending = ""
    if pending:
        raise ParseError(f"Missing operand after '{pending}' in '{expression}'", expression)

    clauses: list[Clause] = []
    for piece in pieces:
        match = _CLAUSE_RE.match(piece)
        operator, operand = (match.group(1) or "="), match.group(2)  # type: ignore[union-attr]
        if not operand:
            raise ParseError(f"Missing operand in clause '{piece}' of '{expression}'", expression)
        if not _OPERAND_RE.match(operand):
            if operand[0] in _OPERATOR_CHARS:
                raise ParseError(
                    f"Unknown operator in clause '{piece}' of '{expression}'", expression
                )
            raise ParseError(f"Invalid version '{operand}' in '{expression}'", expression)
        clauses.append(Clause(operator=operator, version=operand))
    return tuple(clauses)


def parse_range(expression: str) -> VersionRange:
    """Parse a range expression such as ``">=1.2.0 <2.0.0"``.

    Raises :class:`ParseError` on an empty expression, an unknown operator
    or a missing operand.
    """
    if not expression or not expression.strip():
        raise ParseError("Empty version range", expression)
    groups = tuple(_parse_group(g, expression) for g in expression.split("||"))
    return VersionRange(expression=expression, alternatives=groups)


def satisfies_range(value: str, expression: str) -> bool:
    """Evaluate *value* against a range expression.  Raises ``ParseError``."""
    return parse_range(expression).contains(value)
