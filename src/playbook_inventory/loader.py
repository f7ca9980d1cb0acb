"""Provides loading of inventory definitions from python modules or json files."""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from playbook_inventory import logger
from playbook_inventory.normalize import expand_inventory_groups, expand_inventory_hosts
from playbook_inventory.types import Diagnostics, InventoryGroup, InventoryHost, error
from playbook_inventory.utils import FatalError, load_py_module

@dataclass
class InventoryDefinition:
    """Everything a definition file may provide to build an inventory."""

    hosts: list[InventoryHost] = field(default_factory=list)
    """The explicit hosts."""

    groups: list[InventoryGroup] = field(default_factory=list)
    """The explicit groups."""

    hostname: Optional[str] = None
    """The fallback host name, used when `hosts` is empty."""

    port: Optional[int] = None
    """The fallback port, None if unset."""

    host_groups: list[Any] = field(default_factory=list)
    """The raw group names for the fallback host."""

def _read_json(file: str) -> dict[str, Any]:
    try:
        with open(file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FatalError(f"Invalid json: {e}", loc=file) from None
    except OSError as e:
        raise FatalError(f"Cannot read definition: {e.strerror}", loc=file) from None

    if not isinstance(data, dict):
        raise FatalError(f"Definition must be a json object, not {type(data).__name__}!", loc=file)
    return data

def _read_module(file: str) -> dict[str, Any]:
    mod = load_py_module(file)
    return {attr: getattr(mod, attr) for attr in ["hosts", "groups", "hostname", "port", "host_groups"] if hasattr(mod, attr)}

def _as_list(raw: Any, attr: str, file: str) -> list[Any]:
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise FatalError(f"`{attr}` definition must be of type list, not {type(raw)}!", loc=file)
    return list(raw)

def load_definition(file: str) -> tuple[InventoryDefinition, Diagnostics]:
    """
    Loads an inventory definition from the given file. A `*.py` file is executed
    as a python module, any other file is parsed as a json object. Both may define
    `hosts`, `groups`, `hostname`, `port` and `host_groups`. Host and group
    definitions are normalized, so malformed entries only result in diagnostics.

    Parameters
    ----------
    file
        The definition file.

    Raises
    ------
    FatalError
        The file doesn't exist or isn't a valid definition.

    Returns
    -------
    tuple[InventoryDefinition, Diagnostics]
        The loaded definition and the diagnostics.
    """
    if not os.path.isfile(file):
        raise FatalError("Definition file does not exist!", loc=file)

    logger.debug(f"Loading definition {file}")
    raw = _read_module(file) if file.endswith(".py") else _read_json(file)

    diags: Diagnostics = []
    definition = InventoryDefinition()

    definition.hosts, host_diags = expand_inventory_hosts(_as_list(raw.get("hosts"), "hosts", file))
    diags.extend(host_diags)
    definition.groups, group_diags = expand_inventory_groups(_as_list(raw.get("groups"), "groups", file))
    diags.extend(group_diags)
    definition.host_groups = _as_list(raw.get("host_groups"), "host_groups", file)

    hostname = raw.get("hostname")
    if hostname is not None and not isinstance(hostname, str):
        diags.append(error("Error: couldn't parse value to string!", "hostname"))
    else:
        definition.hostname = hostname

    port = raw.get("port")
    if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
        diags.append(error("Error: couldn't parse port to integer!"))
    else:
        definition.port = port

    return definition, diags
