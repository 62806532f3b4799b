"""Custom exception classes for formulary error handling.

This module defines the exception hierarchy for the validation engine:
- RecipeError: Schema literals that cannot be normalized into a Recipe
- UnknownRuleError: Recipes naming a rule the registry does not know
- FieldStateError: Misuse of a Field (evaluated more than once)
- CollaboratorError: Misuse of an external collaborator (phone, date, id)

Validation failures are never raised: they are reported as Issues. These
exceptions cover construction-time and programming errors only. All of them
inherit from FormularyError for consistent error handling.
"""

from typing import Any


class FormularyError(Exception):
    """Base exception for all formulary errors.

    Provides a common base class for all custom exceptions in the engine,
    enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (paths,
                    rule names, values, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class RecipeError(FormularyError):
    """Exception raised when a schema literal cannot become a Recipe.

    Raised by the normalizer for non-mapping roots, non-string rule names and
    malformed nested recipes, by rules declared with a parameter of the wrong
    shape, and by the registry for duplicate rule names.

    Context typically includes:
        - path: Location of the nested recipe inside the root schema
        - rule: Rule whose parameter is malformed
        - value: The offending literal
        - reason: Why the literal was rejected
    """

    def __init__(
        self,
        message: str,
        path: tuple | None = None,
        rule: str | None = None,
        value: Any = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize recipe error with schema details.

        Args:
            message: Human-readable error description
            path: Location of the nested recipe inside the root schema
            rule: Rule whose parameter is malformed
            value: The offending literal
            reason: Why the literal was rejected
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if path is not None:
            context["path"] = path
        if rule is not None:
            context["rule"] = rule
        if value is not None:
            context["value"] = value
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class UnknownRuleError(RecipeError):
    """Exception raised when a recipe names a rule that is not registered.

    Example:
        >>> raise UnknownRuleError(
        ...     "Unknown rule 'minLenght'",
        ...     rule="minLenght",
        ...     path=("user", "name"),
        ...     available=["maxLength", "minLength"],
        ... )
    """

    def __init__(
        self,
        message: str,
        rule: str | None = None,
        path: tuple | None = None,
        available: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        if available is not None:
            extra_context["available"] = available
        super().__init__(message, path=path, rule=rule, **extra_context)


class FieldStateError(FormularyError):
    """Exception raised when a Field is evaluated more than once."""

    def __init__(self, message: str, path: tuple | None = None) -> None:
        super().__init__(message, {"path": path} if path is not None else None)


class CollaboratorError(FormularyError):
    """Exception raised when an external collaborator is used incorrectly.

    The executor converts it into an Issue on the field being evaluated, so a
    bad phone format name or date format fails one branch, not the whole run.

    Context typically includes:
        - collaborator: Name of the collaborator ("phone", "date", "id")
        - operation: Operation that failed
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        collaborator: str | None = None,
        operation: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if collaborator is not None:
            context["collaborator"] = collaborator
        if operation is not None:
            context["operation"] = operation
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)
