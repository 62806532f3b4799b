"""Rule registry.

Rules are declared in plain modules with the @validator / @filter_rule
decorators, which only tag the function. build_registry() collects the tagged
functions from the modules it is given into an immutable RuleRegistry; there
is no global registration step and no way to mutate a registry once built.

Example:
    >>> from formulary.core.registry import build_registry, validator
    >>>
    >>> @validator("even")
    ... def even(accepted, value, field):
    ...     '''Check that a number is even.'''
    ...     if field.is_number():
    ...         return (value % 2 == 0) == accepted
    >>>
    >>> import sys
    >>> registry = build_registry(sys.modules[__name__])
    >>> registry.get("even").kind
    <RuleKind.VALIDATOR: 'validator'>
"""

from collections.abc import Callable, Iterable, Iterator
from functools import lru_cache
from types import MappingProxyType, ModuleType
from typing import Any

from formulary.core.exceptions import RecipeError, UnknownRuleError
from formulary.core.kinds import CAPABILITIES
from formulary.core.protocols import Rule, RuleKind

_RULE_ATTR = "__formulary_rule__"


def _tag(name: str, kind: RuleKind, accepts: Callable[[Any], bool] | None) -> Callable:
    def decorator(func: Callable) -> Callable:
        setattr(func, _RULE_ATTR, (name, kind, accepts))
        return func

    return decorator


def validator(name: str, accepts: Callable[[Any], bool] | None = None) -> Callable:
    """Mark a function as the validator registered under ``name``.

    ``accepts`` checks the parameter a recipe declares for the rule before
    any value reaches it (see formulary.rules.parameters).
    """
    return _tag(name, RuleKind.VALIDATOR, accepts)


def filter_rule(name: str, accepts: Callable[[Any], bool] | None = None) -> Callable:
    """Mark a function as the filter registered under ``name``."""
    return _tag(name, RuleKind.FILTER, accepts)


def rules_in(module: ModuleType) -> Iterator[Rule]:
    """Yield the rules declared in ``module``, in definition order."""
    for obj in vars(module).values():
        tag = getattr(obj, _RULE_ATTR, None)
        if tag is None:
            continue
        name, kind, accepts = tag
        doc = (obj.__doc__ or "").strip().splitlines()
        yield Rule(
            name=name,
            kind=kind,
            func=obj,
            description=doc[0] if doc else "",
            accepts=accepts,
        )


class RuleRegistry:
    """Immutable lookup table of rules and capability predicates."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        table: dict[str, Rule] = {}
        for rule in rules:
            if rule.name in table:
                msg = f"Rule '{rule.name}' is registered twice"
                raise RecipeError(msg, rule=rule.name, reason="Duplicate rule name")
            table[rule.name] = rule
        self._rules = MappingProxyType(table)
        self._capabilities = MappingProxyType(dict(CAPABILITIES))

    def lookup(self, name: str) -> Rule | None:
        return self._rules.get(name)

    def get(self, name: str, path: tuple | None = None) -> Rule:
        """Return the rule registered under ``name``.

        Raises:
            UnknownRuleError: If no such rule exists, listing available names
        """
        rule = self._rules.get(name)
        if rule is None:
            msg = f"Unknown rule '{name}'"
            raise UnknownRuleError(msg, rule=name, path=path, available=self.names())
        return rule

    def names(self, kind: RuleKind | None = None) -> list[str]:
        return sorted(
            name for name, rule in self._rules.items() if kind is None or rule.kind is kind
        )

    def capability(self, name: str) -> Callable[[Any], bool]:
        """Return the capability predicate registered under ``name`` (e.g. ``isString``)."""
        return self._capabilities[name]

    def extend(self, rules: Iterable[Rule]) -> "RuleRegistry":
        """Return a new registry with ``rules`` added; this one is unchanged."""
        return RuleRegistry([*self._rules.values(), *rules])

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())


def build_registry(*modules: ModuleType) -> RuleRegistry:
    """Build a registry from every rule declared in ``modules``."""
    return RuleRegistry(rule for module in modules for rule in rules_in(module))


@lru_cache(maxsize=1)
def default_registry() -> RuleRegistry:
    """The registry of every bundled rule, built once per process."""
    from formulary import rules

    return build_registry(*rules.RULE_MODULES)
