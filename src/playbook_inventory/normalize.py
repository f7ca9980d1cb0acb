"""
Converts loosely typed definitions (as they come from json documents or
user supplied python modules) into `InventoryHost` and `InventoryGroup` records.

None of these functions raise on malformed entries. Each problem is reported
as a diagnostic and the offending entry, element or variable is skipped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from playbook_inventory.types import Diagnostics, InventoryGroup, InventoryHost, error

def _is_list(raw: Any) -> bool:
    return isinstance(raw, (list, tuple))

def to_string_list(raw: Any) -> tuple[list[str], Diagnostics]:
    """
    Returns all string elements of the given sequence. Every element that
    isn't a string is reported and dropped.

    Parameters
    ----------
    raw
        A list or tuple of (hopefully) strings.

    Returns
    -------
    tuple[list[str], Diagnostics]
        The string elements in their original order and the diagnostics.
    """
    diags: Diagnostics = []
    result: list[str] = []
    for value in raw:
        if not isinstance(value, str):
            diags.append(error("Error: couldn't parse value to string!"))
            continue
        result.append(value)
    return result, diags

def to_string_map(raw: Mapping[Any, Any]) -> tuple[dict[str, str], Diagnostics]:
    """
    Returns a copy of the given mapping that only contains entries
    with string values. Every other entry is reported and dropped.
    """
    diags: Diagnostics = []
    result: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str):
            diags.append(error(f"Couldn't parse variable {key} to string"))
            continue
        result[str(key)] = value
    return result, diags

def _expand_entry(kind: str, entry: Any, list_field: str) -> tuple[Any, Diagnostics]:
    """
    Extracts the name, the given list field and the variables from a single entry.
    Returns None instead of the extracted triple if the entry has to be skipped.
    """
    if not isinstance(entry, Mapping):
        return None, [error(f"Invalid {kind} definition: expected map input")]

    name = entry.get("name")
    if not isinstance(name, str) or name == "":
        return None, [error(f"Invalid {kind} definition: missing 'name'")]

    diags: Diagnostics = []
    raw_list = entry.get(list_field)
    values, list_diags = to_string_list(raw_list if _is_list(raw_list) else [])
    diags.extend(list_diags)

    variables: dict[str, str] = {}
    raw_vars = entry.get("variables")
    if isinstance(raw_vars, Mapping):
        variables, var_diags = to_string_map(raw_vars)
        diags.extend(var_diags)

    return (name, values, variables), diags

def expand_inventory_hosts(raw: Any) -> tuple[list[InventoryHost], Diagnostics]:
    """
    Converts a sequence of host definitions into `InventoryHost` records.

    Each definition must be a mapping with a non-empty `name`. The optional `groups`
    list and `variables` mapping must only contain strings, offending elements are
    dropped. Entries that already are `InventoryHost` objects are passed through.

    Parameters
    ----------
    raw
        The host definitions.

    Returns
    -------
    tuple[list[InventoryHost], Diagnostics]
        The valid hosts and all diagnostics that were encountered.
    """
    diags: Diagnostics = []
    hosts: list[InventoryHost] = []
    for entry in raw:
        if isinstance(entry, InventoryHost):
            hosts.append(entry)
            continue

        fields, entry_diags = _expand_entry("host", entry, "groups")
        diags.extend(entry_diags)
        if fields is None:
            continue

        name, groups, variables = fields
        hosts.append(InventoryHost(name=name, groups=groups, variables=variables))
    return hosts, diags

def expand_inventory_groups(raw: Any) -> tuple[list[InventoryGroup], Diagnostics]:
    """
    Converts a sequence of group definitions into `InventoryGroup` records.
    Works exactly like `expand_inventory_hosts`, but reads `children` instead of `groups`.
    """
    diags: Diagnostics = []
    groups: list[InventoryGroup] = []
    for entry in raw:
        if isinstance(entry, InventoryGroup):
            groups.append(entry)
            continue

        fields, entry_diags = _expand_entry("group", entry, "children")
        diags.extend(entry_diags)
        if fields is None:
            continue

        name, children, variables = fields
        groups.append(InventoryGroup(name=name, children=children, variables=variables))
    return groups, diags
