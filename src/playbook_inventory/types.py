"""
Provides the record types that flow through the inventory builder,
as well as the diagnostic types used to report recoverable problems.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_HOST_GROUP = "default"
"""The group a host is attributed to when it declares no group membership."""

class Severity(Enum):
    """The severity of a diagnostic."""
    ERROR = "error"
    WARNING = "warning"

@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem that was encountered while processing."""

    severity: Severity
    """How severe the problem is."""

    summary: str
    """A short, user-facing description of the problem."""

    detail: str = ""
    """Additional information, may be empty."""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary

Diagnostics = list[Diagnostic]
"""
An accumulating sink of diagnostics. Operations never raise on a bad record,
instead they return their diagnostics next to their result so the caller can
merge them and decide whether the overall operation failed.
"""

def error(summary: str, detail: str = "") -> Diagnostic:
    """Returns a new diagnostic with error severity."""
    return Diagnostic(Severity.ERROR, summary, detail)

def has_errors(diags: Diagnostics) -> bool:
    """Returns True if any of the given diagnostics has error severity."""
    return any(d.severity == Severity.ERROR for d in diags)

@dataclass
class InventoryHost:
    """A single host entry of an inventory."""

    name: str
    """
    The name of the host as it will appear in the inventory. Must not be empty.
    Duplicate names are not rejected, they simply produce duplicate lines.
    """

    groups: list[str] = field(default_factory=list)
    """
    The groups this host belongs to. If this is empty, the host
    will be placed into the `DEFAULT_HOST_GROUP`.
    """

    variables: dict[str, str] = field(default_factory=dict)
    """Host variables, rendered in sorted key order on the host's line."""

@dataclass
class InventoryGroup:
    """
    A group entry of an inventory. A group may exist only to declare
    variables or children, without any host referencing it.
    """

    name: str
    """The name of the group. Must not be empty."""

    children: list[str] = field(default_factory=list)
    """
    The names of child groups. Children are not required to be
    declared anywhere else in the inventory.
    """

    variables: dict[str, str] = field(default_factory=dict)
    """Group variables, rendered into the `[name:vars]` section."""
