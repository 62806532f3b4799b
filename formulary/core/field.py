"""Field executor: the recursive validation/transformation engine.

A Field is one unit of work: a value at a path, the Recipe that applies to
it, and the Report it owns. evaluate() runs the recipe's rules in declaration
order. Filters replace the value immediately, so later rules see the new
value. Validators are judged via to_outcome(). Composite rules (properties,
items, oneOf) recurse by creating child Fields; gather_reports() is the
fan-out/fan-in barrier they use.

Fields are single-use. Nothing is shared between Fields except the read-only
registry, recipes and collaborators.
"""

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from formulary.core import kinds
from formulary.core.exceptions import CollaboratorError, FieldStateError, FormularyError
from formulary.core.kinds import MISSING, ValueKind
from formulary.core.protocols import Fail, Issues, Pass, RuleOutcome, to_outcome
from formulary.core.recipe import Recipe, normalize
from formulary.core.registry import RuleRegistry, default_registry
from formulary.core.report import Issue, Path, PathKey, Report

if TYPE_CHECKING:
    from formulary.collaborators import Collaborators

logger = logging.getLogger(__name__)


class Field:
    """A value under validation at a single path.

    Attributes:
        path: Absolute path of this value from the root (used for logging and
              error context; issues in ``report`` are stored relative to it)
        value: Current value; updated by every filter that runs
        recipe: Rules to apply, in order
        report: The Report this field owns
    """

    def __init__(
        self,
        value: Any = MISSING,
        recipe: Any = None,
        path: Path = (),
        registry: RuleRegistry | None = None,
        collaborators: "Collaborators | None" = None,
    ) -> None:
        self.path = tuple(path)
        self.value = value
        self.recipe: Recipe = normalize(recipe if recipe is not None else {}, self.path)
        self.registry = registry if registry is not None else default_registry()
        if collaborators is None:
            from formulary.collaborators import default_collaborators

            collaborators = default_collaborators()
        self.collaborators = collaborators
        self.report = Report()
        self._evaluated = False

    def __repr__(self) -> str:
        return f"Field(path={self.path!r}, value={self.value!r})"

    # Capability predicates over the current value.

    def kind(self) -> ValueKind:
        return kinds.kind_of(self.value)

    def is_string(self) -> bool:
        return kinds.is_string(self.value)

    def is_bool(self) -> bool:
        return kinds.is_bool(self.value)

    def is_number(self) -> bool:
        return kinds.is_number(self.value)

    def is_object(self) -> bool:
        return kinds.is_object(self.value)

    def is_array(self) -> bool:
        return kinds.is_array(self.value)

    def is_null(self) -> bool:
        return kinds.is_null(self.value)

    def is_undefined(self) -> bool:
        return kinds.is_undefined(self.value)

    def is_mapping(self) -> bool:
        return kinds.is_mapping(self.value)

    # Recursion.

    def child(self, key: PathKey, value: Any, schema: Any) -> "Field":
        """Create the Field for property/index ``key`` of this value."""
        return Field(
            value=value,
            recipe=normalize(schema, self.path + (key,)),
            path=self.path + (key,),
            registry=self.registry,
            collaborators=self.collaborators,
        )

    def alternative(self, schema: Any) -> "Field":
        """Create a throwaway Field for the same value at the same path."""
        return Field(
            value=self.value,
            recipe=normalize(schema, self.path),
            path=self.path,
            registry=self.registry,
            collaborators=self.collaborators,
        )

    async def evaluate(self) -> Report:
        """Run every rule of the recipe and seal the report.

        Returns:
            Report with the final value and all issues of this subtree

        Raises:
            FieldStateError: If the field was already evaluated
            UnknownRuleError: If the recipe names an unregistered rule
            RecipeError: If a rule parameter or a nested schema literal is malformed
        """
        if self._evaluated:
            raise FieldStateError("Field was already evaluated", path=self.path)
        self._evaluated = True

        for name, accepted in self.recipe.rules():
            rule = self.registry.get(name, self.path)
            rule.check_parameter(accepted, self.path)
            logger.debug("rule %s at %s (%s)", name, self.path, rule.kind.value)

            try:
                result = rule.func(accepted, self.value, self)
                if inspect.isawaitable(result):
                    result = await result
            except CollaboratorError as e:
                self._record_failure(name, accepted, e)
                continue
            except FormularyError:
                raise
            except Exception as e:
                self._record_failure(name, accepted, e)
                continue

            if rule.is_filter:
                self.value = result
            else:
                self._record(name, accepted, to_outcome(result))

        self.report.value = self.value
        return self.report

    def _record(self, name: str, accepted: Any, outcome: RuleOutcome) -> None:
        if isinstance(outcome, Pass):
            return

        if isinstance(outcome, Issues):
            self.report.extend(outcome.items)
            if outcome.value is not MISSING:
                self.value = outcome.value
            return

        if isinstance(outcome, Fail):
            detail = outcome.detail or {}
            self.report.add(
                Issue(
                    path=(),
                    rule=name,
                    accepted=detail.get("accept", accepted),
                    current=detail.get("current", self.value),
                    value=detail.get("value", self.value),
                )
            )

    def _record_failure(self, name: str, accepted: Any, error: Exception) -> None:
        logger.warning(
            "rule %s raised at %s: %s: %s", name, self.path, type(error).__name__, error
        )
        self.report.add(
            Issue(
                path=(),
                rule=name,
                accepted=accepted,
                current=self.kind().value,
                value=self.value,
                message=f"{type(error).__name__}: {error}",
            )
        )


async def gather_reports(children: Sequence[tuple[PathKey, Field]]) -> list[tuple[PathKey, Report]]:
    """Evaluate child fields concurrently and wait for all of them.

    Every child runs to completion even when a sibling raises; the first
    exception (in declaration order) is re-raised afterwards.
    """
    results = await asyncio.gather(
        *(child.evaluate() for _, child in children), return_exceptions=True
    )

    for result in results:
        if isinstance(result, BaseException):
            raise result

    return [(key, report) for (key, _), report in zip(children, results)]
