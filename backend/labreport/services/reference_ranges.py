"""Reference range expression resolution.

Catalog ranges may combine several sub-ranges in one text, e.g.

    "Men: 13.0-17.0\\nWomen: 12.0-15.0\\nChildren: 11.0-14.0"
    "M: 0.7-1.3, F: 0.6-1.1"

resolve_range() picks the sub-range that applies to a patient. Rules are
tried in order and the first rule that both applies to the patient and finds
its clause in the text wins:

    pediatric  age < cutoff           Children: / Child:
    male       sex is "male" or "m"   M: / Male: / Men:
    female     sex is "female" or "f" F: / Female: / Women:

A clause value runs to the next comma or newline. When no rule matches the
expression is returned verbatim, so plain ranges ("70-110"), inequalities
("Less than 75.0") and note-style text pass through unchanged.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from labreport.config import DEFAULT_PEDIATRIC_AGE_CUTOFF
from labreport.utils.numbers import parse_number

logger = logging.getLogger(__name__)

# Introducers are anchored on a word boundary so "Women:" never reads as
# "men:", "Female:" never as "male:" and "AM:" never as "M:".
_CLAUSE_VALUE = r":\s*([^,\n\r]+)"
PEDIATRIC_CLAUSE_RE = re.compile(r"\b(?:Children|Child)" + _CLAUSE_VALUE, re.IGNORECASE)
MALE_CLAUSE_RE = re.compile(r"\b(?:Male|Men|M)" + _CLAUSE_VALUE, re.IGNORECASE)
FEMALE_CLAUSE_RE = re.compile(r"\b(?:Female|Women|F)" + _CLAUSE_VALUE, re.IGNORECASE)

_MALE_SEXES = frozenset({"male", "m"})
_FEMALE_SEXES = frozenset({"female", "f"})


@dataclass(frozen=True)
class PatientFacts:
    """Normalized patient attributes seen by the clause rules."""

    sex: str
    age: float | None
    pediatric_cutoff: float

    @property
    def is_pediatric(self) -> bool:
        return self.age is not None and self.age < self.pediatric_cutoff


@dataclass(frozen=True)
class ClauseRule:
    """One sub-range selector.

    Attributes:
        name: Rule name, for logging.
        pattern: Regex whose first group captures the clause value.
        applies: Predicate deciding whether the rule is eligible for a patient.
    """

    name: str
    pattern: re.Pattern[str]
    applies: Callable[[PatientFacts], bool]

    def match(self, expression: str) -> str | None:
        """Return the trimmed clause value, or None if absent or blank."""
        found = self.pattern.search(expression)
        if not found:
            return None
        value = found.group(1).strip()
        return value or None


RANGE_RULES: tuple[ClauseRule, ...] = (
    ClauseRule("pediatric", PEDIATRIC_CLAUSE_RE, lambda p: p.is_pediatric),
    ClauseRule("male", MALE_CLAUSE_RE, lambda p: p.sex in _MALE_SEXES),
    ClauseRule("female", FEMALE_CLAUSE_RE, lambda p: p.sex in _FEMALE_SEXES),
)


def parse_age(age: float | str | None) -> float | None:
    """Numeric age from a number or numeric-leading text ("5 Y" -> 5.0)."""
    if age is None:
        return None
    return parse_number(age)


def resolve_range(
    expression: str,
    sex: str | None,
    age: float | str | None = None,
    pediatric_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF,
    rules: tuple[ClauseRule, ...] = RANGE_RULES,
) -> str:
    """Resolve the sub-range of a range expression that applies to a patient.

    Never raises; unrecognized input comes back unchanged.

    Args:
        expression: Raw reference range text from a template.
        sex: Patient sex ("Male", "Female", "M", "F" or free text).
        age: Age in years as a number or numeric-leading text.
        pediatric_cutoff: Ages strictly below this select "Children:" clauses.
        rules: Ordered clause rules (override in tests).

    Returns:
        The applicable clause value, or the original expression.
    """
    if not expression:
        return expression

    facts = PatientFacts(
        sex=(sex or "").strip().lower(),
        age=parse_age(age),
        pediatric_cutoff=pediatric_cutoff,
    )

    for rule in rules:
        if not rule.applies(facts):
            continue
        value = rule.match(expression)
        if value is not None:
            logger.debug("Range rule %s matched %r -> %r", rule.name, expression, value)
            return value

    return expression
