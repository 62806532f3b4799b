"""Recipe normalization.

A Recipe is the canonical form of a schema node: an immutable, ordered
mapping from rule name to the rule's accepted parameter. Declaration order is
execution order, so normalization never reorders keys.

Shorthand forms accepted by normalize():
    "string"                 -> {"type": "string"}
    re.compile("^[a-z]+$")   -> {"regexp": re.compile("^[a-z]+$")}

Example:
    >>> recipe = normalize({"type": "string", "trim": True, "minLength": 3})
    >>> list(recipe)
    ['type', 'trim', 'minLength']
    >>> normalize(recipe) is recipe
    True
"""

import re
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from formulary.core.exceptions import RecipeError

if TYPE_CHECKING:
    from formulary.core.registry import RuleRegistry

# Keys that carry data for a parent rule rather than naming a rule themselves.
ANNOTATIONS = frozenset({"acceptEmpty", "title", "description"})


class Recipe(Mapping):
    """Immutable ordered mapping of rule name -> accepted parameter."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, Any] | None = None) -> None:
        self._rules: dict[str, Any] = dict(rules or {})

    def __getitem__(self, name: str) -> Any:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"Recipe({self._rules!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return list(self.items()) == list(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def rules(self) -> Iterator[tuple[str, Any]]:
        """Yield (name, accepted) pairs that name rules, skipping annotations."""
        for name, accepted in self._rules.items():
            if name not in ANNOTATIONS:
                yield name, accepted


def normalize(schema: Any, path: tuple = ()) -> Recipe:
    """Convert a schema literal into a Recipe.

    Args:
        schema: A Recipe, a mapping, a bare type name or a compiled pattern
        path: Location of this literal in the root schema (for error context)

    Returns:
        The canonical Recipe; an existing Recipe is returned unchanged

    Raises:
        RecipeError: If the literal has no canonical form or a rule name is
                     not a string
    """
    if isinstance(schema, Recipe):
        return schema

    if isinstance(schema, str):
        return Recipe({"type": schema})

    if isinstance(schema, re.Pattern):
        return Recipe({"regexp": schema})

    if not isinstance(schema, Mapping):
        msg = f"Schema must be a mapping, got: {type(schema).__name__}"
        raise RecipeError(msg, path=path, value=schema, reason="Invalid schema type")

    for name in schema:
        if not isinstance(name, str):
            msg = f"Rule names must be strings, got: {name!r}"
            raise RecipeError(msg, path=path, value=name, reason="Invalid rule name")

    return Recipe(schema)


def nested_literals(recipe: Recipe) -> Iterator[tuple[tuple, str, Any]]:
    """Yield (path suffix, rule, literal) for every schema nested in ``recipe``.

    Covers ``properties`` (one literal per property), ``items`` and ``oneOf``
    (one literal per alternative, located at the parent's own path).
    """
    for name, accepted in recipe.rules():
        if name == "properties" and isinstance(accepted, Mapping):
            for key, literal in accepted.items():
                yield (key,), name, literal
        elif name == "items":
            yield ("*",), name, accepted
        elif name == "oneOf" and isinstance(accepted, (list, tuple)):
            for literal in accepted:
                yield (), name, literal


def check_recipe(schema: Any, registry: "RuleRegistry", path: tuple = ()) -> Recipe:
    """Normalize ``schema`` and every nested schema, checking rule names.

    The executor normalizes nested schemas lazily and only discovers an
    unknown rule when a value reaches it; this walks the whole tree up front.

    Raises:
        RecipeError: If any nested literal or rule parameter is malformed
        UnknownRuleError: For the first rule name the registry does not know
    """
    recipe = normalize(schema, path)

    for name, accepted in recipe.rules():
        registry.get(name, path).check_parameter(accepted, path)

    for suffix, _, literal in nested_literals(recipe):
        check_recipe(literal, registry, path + suffix)

    return recipe
