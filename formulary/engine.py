"""Validation entry point.

Usage:
    >>> from formulary import validate
    >>>
    >>> report = await validate(
    ...     {"email": " Ada@Example.com "},
    ...     {"type": "object", "properties": {"email": {"trim": True, "email": True}}},
    ... )
    >>> report.is_valid()
    True
    >>> report.value
    {'email': 'Ada@Example.com'}

Engine binds a rule registry and a set of collaborators; the module-level
validate() and validate_sync() use a default engine built from the bundled
rules and library-backed collaborators.
"""

import asyncio
import logging
import time
from functools import lru_cache
from typing import Any

from formulary.collaborators import Collaborators, default_collaborators
from formulary.core.field import Field
from formulary.core.recipe import check_recipe, normalize
from formulary.core.registry import RuleRegistry, default_registry
from formulary.core.report import Report

logger = logging.getLogger(__name__)


class Engine:
    """Validates values against schemas with a fixed registry and collaborators.

    Args:
        registry: Rules to resolve names against (bundled rules by default)
        collaborators: Phone/date/identifier services (library-backed by default)
        strict: Check every rule name in the schema, nested ones included,
                before touching the value. Without it an unknown nested rule
                only surfaces when a value reaches it.

    Example:
        >>> engine = Engine(collaborators=default_collaborators("NL"), strict=True)
        >>> report = await engine.validate("020 123 4567", {"toE164": True})
        >>> report.value
        '+31201234567'
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        collaborators: Collaborators | None = None,
        strict: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.collaborators = collaborators if collaborators is not None else default_collaborators()
        self.strict = strict

    async def validate(self, value: Any, schema: Any) -> Report:
        """Validate and transform ``value`` according to ``schema``.

        Args:
            value: The value to validate (MISSING for "no value at all")
            schema: A schema literal or Recipe

        Returns:
            Report with the transformed value and every issue found; issue
            paths are relative to ``value``

        Raises:
            RecipeError: If the schema cannot be normalized
            UnknownRuleError: If the schema names an unregistered rule
        """
        start_time = time.perf_counter()

        if self.strict:
            recipe = check_recipe(schema, self.registry)
        else:
            recipe = normalize(schema)

        field = Field(
            value=value,
            recipe=recipe,
            registry=self.registry,
            collaborators=self.collaborators,
        )
        report = await field.evaluate()

        logger.info(
            "validation complete: valid=%s issues=%d rules=%d duration_ms=%.2f",
            report.is_valid(),
            len(report.issues),
            len(recipe),
            (time.perf_counter() - start_time) * 1000,
        )
        return report

    def validate_sync(self, value: Any, schema: Any, timeout: float | None = None) -> Report:
        """Blocking variant of validate(), with an optional deadline in seconds.

        Raises:
            TimeoutError: If ``timeout`` elapses first
        """

        async def run() -> Report:
            return await asyncio.wait_for(self.validate(value, schema), timeout)

        return asyncio.run(run())


@lru_cache(maxsize=1)
def default_engine() -> Engine:
    """Engine with the bundled rules and library-backed collaborators."""
    return Engine()


async def validate(value: Any, schema: Any) -> Report:
    """Validate ``value`` against ``schema`` with the default engine."""
    return await default_engine().validate(value, schema)


def validate_sync(value: Any, schema: Any, timeout: float | None = None) -> Report:
    """Blocking validate() with the default engine."""
    return default_engine().validate_sync(value, schema, timeout)
