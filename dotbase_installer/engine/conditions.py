"""Predicates deciding whether a question is asked.

A condition is written in the flow YAML as clauses joined by ``and``:

    USE_SENTRY
    not USE_HTTPS
    DEPLOYMENT == production
    USE_EXTENSIONS and 'ldapServer' in EXTENSIONS_TO_USE

Absent answers are falsy and contain nothing.
"""

import re
from typing import Any, Callable, FrozenSet, List, Mapping, Tuple

KEY = r'[A-Za-z_][A-Za-z0-9_.]*'

_AND_SPLIT = re.compile(r"""\s+and\s+(?=(?:[^'"]*['"][^'"]*['"])*[^'"]*$)""")
_NOT = re.compile(rf'^not\s+({KEY})$')
_IN = re.compile(rf"""^(['"])(.*)\1\s+in\s+({KEY})$""")
_COMPARE = re.compile(rf'^({KEY})\s*(==|!=)\s*(.+)$')
_TRUTHY = re.compile(rf'^({KEY})$')

Clause = Callable[[Mapping[str, Any]], bool]


def _parse_literal(text: str) -> Any:
    """Turn the right-hand side of a comparison into a Python value."""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    lowered = text.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    try:
        return int(text)
    except ValueError:
        return text


def _contains(answers: Mapping[str, Any], key: str, needle: str) -> bool:
    # Membership only applies to multi-select answers, never to substrings
    value = answers.get(key)
    if not isinstance(value, (list, tuple)):
        return False
    return needle in value


def _parse_clause(clause: str) -> Tuple[str, Clause]:
    match = _NOT.match(clause)
    if match:
        key = match.group(1)
        return key, lambda answers: not answers.get(key)

    match = _IN.match(clause)
    if match:
        needle, key = match.group(2), match.group(3)
        return key, lambda answers: _contains(answers, key, needle)

    match = _COMPARE.match(clause)
    if match:
        key, operator, literal = match.group(1), match.group(2), _parse_literal(match.group(3))
        if operator == '==':
            return key, lambda answers: answers.get(key) == literal
        return key, lambda answers: answers.get(key) != literal

    match = _TRUTHY.match(clause)
    if match:
        key = match.group(1)
        return key, lambda answers: bool(answers.get(key))

    raise ValueError(f"Cannot parse condition clause: {clause!r}")


class Condition:
    """Parsed ``when`` expression.

    Exposes the answer keys it reads so the question graph can reject
    references to questions that are asked later.
    """

    def __init__(self, expression: str):
        expression = expression.strip()
        if not expression:
            raise ValueError("Condition expression cannot be empty")

        self.expression = expression
        keys: List[str] = []
        self._clauses: List[Clause] = []
        for clause in _AND_SPLIT.split(expression):
            key, fn = _parse_clause(clause.strip())
            keys.append(key)
            self._clauses.append(fn)
        self.keys: FrozenSet[str] = frozenset(keys)

    def __call__(self, answers: Mapping[str, Any]) -> bool:
        return all(clause(answers) for clause in self._clauses)

    def __repr__(self) -> str:
        return f"Condition({self.expression!r})"
