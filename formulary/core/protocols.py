"""Rule protocol and rule outcome types.

A rule is a callable ``(accepted, value, field)`` registered under a name.
Validators judge the value; filters return a replacement for it. Either may
be a coroutine function.

Validators answer with whatever is most natural to write (True, False, None,
a detail mapping or a list of Issues). to_outcome() folds those answers into
the closed RuleOutcome sum type that the executor consumes:

    Pass                  no issue
    Fail(detail)          one issue at the field's own path
    Issues(items, value)  issues relative to the field; optionally a new value
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from formulary.core.exceptions import RecipeError
from formulary.core.kinds import MISSING
from formulary.core.report import Issue

if TYPE_CHECKING:
    from formulary.core.field import Field


class RuleKind(Enum):
    """Whether a rule judges the value or transforms it."""

    VALIDATOR = "validator"
    FILTER = "filter"


class RuleFunc(Protocol):
    """Signature shared by validators and filters."""

    def __call__(self, accepted: Any, value: Any, field: "Field") -> Any:
        ...


@dataclass(frozen=True)
class Rule:
    """A named validator or filter.

    Attributes:
        name: Name used in recipes (camelCase, e.g. ``minLength``)
        kind: RuleKind.VALIDATOR or RuleKind.FILTER
        func: The rule implementation
        description: First line of the implementation's docstring
        accepts: Predicate over the declared parameter; its docstring names
                 the expected shape in error messages
    """

    name: str
    kind: RuleKind
    func: RuleFunc
    description: str = ""
    accepts: Callable[[Any], bool] | None = None

    @property
    def is_filter(self) -> bool:
        return self.kind is RuleKind.FILTER

    def check_parameter(self, accepted: Any, path: tuple = ()) -> None:
        """Reject a declared parameter this rule cannot work with.

        Raises:
            RecipeError: If ``accepts`` rejects ``accepted``
        """
        if self.accepts is None or self.accepts(accepted):
            return
        expected = (self.accepts.__doc__ or "").strip() or "a different parameter"
        msg = f"'{self.name}' expects {expected}, got: {accepted!r}"
        raise RecipeError(msg, path=path, rule=self.name, value=accepted, reason="Invalid parameter")


@dataclass(frozen=True)
class Pass:
    pass


@dataclass(frozen=True)
class Fail:
    """One failure at the field's own path; ``detail`` overrides issue fields."""

    detail: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class Issues:
    """Issues relative to the current field, from composite rules.

    ``value`` replaces the field value when set (properties and items hand
    back the object or list they assembled from their children).
    """

    items: list[Issue] = field(default_factory=list)
    value: Any = MISSING


RuleOutcome = Pass | Fail | Issues

PASS = Pass()


def to_outcome(result: Any) -> RuleOutcome:
    """Interpret a validator's raw return value.

    ``None`` is a deliberate pass: type-guarded rules abstain silently when
    the value is not theirs to judge.
    """
    if isinstance(result, (Pass, Fail, Issues)):
        return result
    if result is True or result is None:
        return PASS
    if result is False:
        return Fail()
    if isinstance(result, Mapping):
        return Fail(result)
    if isinstance(result, list) and all(isinstance(item, Issue) for item in result):
        return Issues(result) if result else PASS
    return PASS if result else Fail()
