"""Issue and Report data structures, and the aggregator that merges them.

A Report is what evaluating one Field produces: the final (possibly
transformed) value and every Issue found in that field's subtree. Issue paths
are relative to the node whose Report holds them, so the Report returned for
the root value carries paths relative to the root.

merge() is the fan-in half of properties/items: it folds child Reports into
one, prefixing each child issue path with the child's key.
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from formulary.core.kinds import MISSING

PathKey = str | int
Path = tuple[PathKey, ...]


@dataclass(frozen=True)
class Issue:
    """A single path-qualified rule failure.

    Attributes:
        path: Keys and indices leading from the report's node to the failure.
              An empty path means the node itself.
        rule: Name of the rule that failed.
        accepted: The rule's declared parameter (or the detail the rule chose
                  to report in its place).
        current: The observed value, or the observed value's kind.
        value: The value at the time of failure, when applicable.
        message: Error text when a collaborator raised instead of answering.

    Example:
        >>> issue = Issue(path=("age",), rule="minimum", accepted=18, current=16, value=16)
        >>> issue.rebase("user").path
        ('user', 'age')
    """

    path: Path
    rule: str
    accepted: Any = None
    current: Any = None
    value: Any = None
    message: str | None = None

    def rebase(self, key: PathKey) -> "Issue":
        """Return a copy of this issue located under ``key``."""
        return replace(self, path=(key, *self.path))

    def dotted_path(self) -> str:
        """Render the path for humans: ``items.0.name``; ``<root>`` when empty."""
        if not self.path:
            return "<root>"
        return ".".join(str(key) for key in self.path)

    def to_json(self) -> dict[str, Any]:
        """Export as a JSON-compatible dictionary.

        Values without a JSON representation (ObjectId, datetime, compiled
        patterns) are rendered with ``str``; MISSING becomes ``None``.
        """
        data = {
            "path": list(self.path),
            "rule": self.rule,
            "accepted": _jsonable(self.accepted),
            "current": _jsonable(self.current),
            "value": _jsonable(self.value),
        }
        if self.message is not None:
            data["message"] = self.message
        return data

    @staticmethod
    def from_json(data: dict[str, Any]) -> "Issue":
        return Issue(
            path=tuple(data["path"]),
            rule=data["rule"],
            accepted=data.get("accepted"),
            current=data.get("current"),
            value=data.get("value"),
            message=data.get("message"),
        )


@dataclass
class Report:
    """Final value plus accumulated issues for one Field and its subtree.

    An issue-free Report signals success. ``value`` is always set once
    evaluation completes, even when issues exist.

    Example:
        >>> report = Report(value={"name": "Ada"})
        >>> report.is_valid()
        True
    """

    value: Any = MISSING
    issues: list[Issue] = field(default_factory=list)

    def has_issues(self) -> bool:
        return len(self.issues) > 0

    def is_valid(self) -> bool:
        return not self.has_issues()

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)

    def extend(self, issues: Iterable[Issue]) -> None:
        self.issues.extend(issues)

    def issues_at(self, *path: PathKey) -> list[Issue]:
        """Return the issues located exactly at ``path``."""
        return [issue for issue in self.issues if issue.path == path]

    def summary(self) -> str:
        """Generate summary string.

        Example:
            >>> Report(value=1).summary()
            'Validation passed'
        """
        if not self.has_issues():
            return "Validation passed"
        paths = {issue.path for issue in self.issues}
        return f"Validation failed: {len(self.issues)} issue(s) at {len(paths)} path(s)"

    def format(self) -> str:
        """Format report as human-readable text.

        Example:
            >>> print(report.format())
            Validation failed: 2 issue(s) at 2 path(s)
              - name: required (accepted=True, current=False)
              - age: minimum (accepted=18, current=16)
        """
        lines = [self.summary()]
        for issue in self.issues:
            line = (
                f"  - {issue.dotted_path()}: {issue.rule} "
                f"(accepted={issue.accepted!r}, current={issue.current!r})"
            )
            if issue.message:
                line += f" {issue.message}"
            lines.append(line)
        return "\n".join(lines)

    def to_json(self) -> dict[str, Any]:
        """Export report as JSON for programmatic access."""
        return {
            "is_valid": self.is_valid(),
            "value": _jsonable(self.value),
            "issues": [issue.to_json() for issue in self.issues],
        }

    @staticmethod
    def from_json(data: dict[str, Any]) -> "Report":
        """Reconstruct a Report from ``to_json()`` output.

        Values that were rendered with ``str`` come back as strings.
        """
        return Report(
            value=data.get("value"),
            issues=[Issue.from_json(item) for item in data.get("issues", [])],
        )


def merge(
    keyed_reports: Sequence[tuple[PathKey, Report]],
    shape: type = dict,
) -> Report:
    """Fold child reports into a single report.

    Issues are concatenated in child order, each rebased onto its child's key.
    The value is assembled in the input's shape: a dict keyed by property
    name, or a list in index order (children are expected to cover every
    index, failed or not). Nothing is deduplicated.

    Args:
        keyed_reports: (key, report) pairs in the order the children were declared
        shape: ``dict`` for properties, ``list`` for items

    Returns:
        Report holding the assembled value and the rebased issues

    Example:
        >>> merged = merge([("a", Report(1)), ("b", Report(2, [Issue((), "equals")]))])
        >>> merged.value
        {'a': 1, 'b': 2}
        >>> merged.issues[0].path
        ('b',)
    """
    issues: list[Issue] = []
    for key, report in keyed_reports:
        issues.extend(issue.rebase(key) for issue in report.issues)

    if shape is list:
        value: Any = [report.value for _, report in keyed_reports]
    else:
        value = {key: report.value for key, report in keyed_reports}

    return Report(value=value, issues=issues)


def _jsonable(value: Any) -> Any:
    if value is MISSING:
        return None
    try:
        return json.loads(json.dumps(value, default=str))
    except (TypeError, ValueError):
        return str(value)
