"""Rule registry.

An ordered, read-only mapping from rule name to rule. A registry is populated
once when it is built; adding custom rules produces a new registry so that a
registry shared between evaluations never changes underneath them.

Example Usage:
==============
from a11yeval.rules import default_registry

registry = default_registry().with_rules(IconButtonRule())
for name, rule in registry.items():
    issues = rule.check(document)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from a11yeval.exceptions import RuleRegistrationError
from a11yeval.rules.base_rule import AccessibilityRule


def passed_check_name(rule: AccessibilityRule) -> str:
    """Marker recorded in ``passed_checks`` when a rule finds nothing."""
    return f"{rule.standard.value}: {rule.name}"


class RuleRegistry(Mapping[str, AccessibilityRule]):
    """Ordered, immutable collection of rules keyed by name."""

    def __init__(self, rules: Iterable[AccessibilityRule] = ()) -> None:
        entries: dict[str, AccessibilityRule] = {}
        for rule in rules:
            if not isinstance(rule, AccessibilityRule):
                raise RuleRegistrationError(repr(rule), "not an AccessibilityRule")
            if rule.name in entries:
                raise RuleRegistrationError(rule.name, "a rule with this name is already registered")
            entries[rule.name] = rule
        self._rules = MappingProxyType(entries)

    def __getitem__(self, name: str) -> AccessibilityRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({list(self._rules)!r})"

    def with_rules(self, *rules: AccessibilityRule) -> RuleRegistry:
        """Return a new registry with ``rules`` appended."""
        return RuleRegistry([*self._rules.values(), *rules])

    def without(self, *names: str) -> RuleRegistry:
        """Return a new registry without the named rules."""
        return RuleRegistry(rule for name, rule in self._rules.items() if name not in names)

    def get_rule_names(self) -> list[str]:
        return list(self._rules)

    def criteria_by_check(self) -> dict[str, str]:
        """Map each rule's passed-check marker to the criterion it checks."""
        return {
            passed_check_name(rule): rule.wcag_criterion
            for rule in self._rules.values()
            if rule.wcag_criterion
        }
