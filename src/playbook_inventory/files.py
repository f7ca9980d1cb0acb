"""
Provides the filesystem side of inventory handling: writing rendered
inventories to uniquely named temporary files, finding them again by
their name prefix and removing them.

Filesystem failures are reported as diagnostics and never abort the
remaining steps of an operation.
"""

from __future__ import annotations

import os
import tempfile
from typing import IO, Any, Optional

from playbook_inventory import logger
from playbook_inventory.inventory import build_inventory_content, default_hosts
from playbook_inventory.types import Diagnostics, InventoryGroup, InventoryHost, error

def create_temp(pattern: str) -> tuple[str, IO[str]]:
    """
    Creates a new uniquely named file in the system temporary directory and opens it for writing.

    Parameters
    ----------
    pattern
        The file name pattern. The last `*` is replaced by a random string.
        If the pattern contains no `*`, the random string is appended.

    Raises
    ------
    OSError
        The file could not be created.

    Returns
    -------
    tuple[str, IO[str]]
        The absolute path of the new file and a text handle to it.
    """
    prefix, star, suffix = pattern.rpartition("*")
    if not star:
        prefix, suffix = pattern, ""

    fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    return path, os.fdopen(fd, "w", encoding="utf-8")

def render_playbook_inventory(hostname: str,
                              port: Optional[int],
                              hostgroups: Any,
                              inventory_hosts: list[InventoryHost],
                              inventory_groups: list[InventoryGroup]) -> tuple[str, Diagnostics]:
    """
    Renders the inventory document without touching the filesystem.
    If no explicit hosts are given, a single host is synthesized from the
    given fallback parameters (see `playbook_inventory.inventory.default_hosts`).
    """
    diags: Diagnostics = []
    hosts = inventory_hosts
    if len(hosts) == 0:
        hosts, host_diags = default_hosts(hostname, port, hostgroups)
        diags.extend(host_diags)

    content, build_diags = build_inventory_content(hosts, inventory_groups)
    diags.extend(build_diags)
    return content, diags

def build_playbook_inventory(inventory_dest: str,
                             hostname: str,
                             port: Optional[int],
                             hostgroups: Any,
                             inventory_hosts: list[InventoryHost],
                             inventory_groups: list[InventoryGroup]) -> tuple[str, Diagnostics]:
    """
    Renders the inventory and writes it into a new temporary file.

    Parameters
    ----------
    inventory_dest
        The file name pattern for the temporary file, see `create_temp`.
    hostname
        The fallback host name, used only if `inventory_hosts` is empty.
    port
        The fallback port, or None to leave it unset.
    hostgroups
        The raw group names of the fallback host.
    inventory_hosts
        The explicit hosts.
    inventory_groups
        The explicit groups.

    Returns
    -------
    tuple[str, Diagnostics]
        The path of the inventory file and all diagnostics. The path is
        returned even if writing failed, and is empty if the file could not be created.
    """
    diags: Diagnostics = []
    path = ""
    handle: Optional[IO[str]] = None
    try:
        path, handle = create_temp(inventory_dest)
        logger.debug(f"Inventory {path} was created")
    except OSError as e:
        diags.append(error(f"Fail to create inventory file: {e}"))

    content, render_diags = render_playbook_inventory(hostname, port, hostgroups, inventory_hosts, inventory_groups)
    diags.extend(render_diags)

    if handle is not None:
        try:
            with handle:
                handle.write(content)
        except (OSError, UnicodeError) as e:
            diags.append(error(f"Fail to write inventory: {e}"))

    return path, diags

def remove_file(filename: str) -> Diagnostics:
    """Removes the given file."""
    try:
        os.remove(filename)
    except OSError as e:
        return [error(f"Fail to remove file {filename}: {e}")]
    return []

def get_all_inventories(inventory_prefix: str) -> tuple[list[str], Diagnostics]:
    """
    Returns the absolute paths of all entries in the system temporary
    directory whose name starts with the given prefix, sorted by name.
    """
    diags: Diagnostics = []
    temp_dir = tempfile.gettempdir()
    logger.debug(f"[TEMP DIR]: {temp_dir}")

    try:
        names = sorted(os.listdir(temp_dir))
    except OSError as e:
        diags.append(error(f"Fail to read dir {temp_dir}: {e}"))
        names = []

    inventories = [os.path.join(temp_dir, name) for name in names if name.startswith(inventory_prefix)]
    return inventories, diags
