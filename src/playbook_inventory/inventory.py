"""
Provides the inventory content builder, which merges host and group
records into a single INI-style inventory document.

The output is a pure function of the given records. Variables are stored
in unordered mappings, so every dimension of the output (group names,
host lines, variable keys and children) is sorted explicitly before rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from jinja2 import Environment, StrictUndefined

from playbook_inventory.normalize import to_string_list
from playbook_inventory.types import DEFAULT_HOST_GROUP, Diagnostics, InventoryGroup, InventoryHost, error

def quote_value(value: str) -> str:
    """
    Returns the given value as a double quoted string literal.

    Quotes and backslashes are escaped, as well as all non-printable characters.
    Printable characters (including non-ascii ones) are kept as-is.

    Example:

        >>> print(quote_value('say "hi"\\n'))
        "say \\"hi\\"\\n"

    Parameters
    ----------
    value
        The value to quote.

    Returns
    -------
    str
        The quoted value.
    """
    def escape_char(c: str) -> str:
        special = {'"': '\\"', '\\': '\\\\', '\a': '\\a', '\b': '\\b',
                   '\f': '\\f', '\n': '\\n', '\r': '\\r', '\t': '\\t', '\v': '\\v'}
        if c in special:
            return special[c]
        if c.isprintable():
            return c

        num = ord(c)
        if num < 0x20 or num == 0x7f:
            return f"\\x{num:02x}"
        if num < 0x10000:
            return f"\\u{num:04x}"
        return f"\\U{num:08x}"
    return '"' + ''.join(escape_char(c) for c in value) + '"'

_jinja2_env: Environment = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    trim_blocks=True,
    keep_trailing_newline=True)
"""The jinja2 environment used to render inventories."""
_jinja2_env.filters["quote"] = quote_value

_inventory_template = _jinja2_env.from_string("""\
{% for section in sections %}
[{{ section.name }}]
{% for line in section.host_lines %}
{{ line }}
{% endfor %}

{% if section.variables %}
[{{ section.name }}:vars]
{% for key, value in section.variables %}
{{ key }}={{ value | quote }}
{% endfor %}

{% endif %}
{% if section.children %}
[{{ section.name }}:children]
{% for child in section.children %}
{{ child }}
{% endfor %}

{% endif %}
{% endfor %}
""")

@dataclass
class GroupSection:
    """All sorted information that will be rendered for a single group."""

    name: str
    """The group name."""

    host_lines: list[str] = field(default_factory=list)
    """The rendered host lines of all member hosts, sorted."""

    variables: list[tuple[str, str]] = field(default_factory=list)
    """The group variables as (key, value) pairs, sorted by key."""

    children: list[str] = field(default_factory=list)
    """The child group names, sorted."""

def format_host_line(name: str, variables: dict[str, str]) -> str:
    """
    Returns the inventory line for a host: the host name followed
    by a ` key="value"` pair for each variable, sorted by key.
    """
    line = name
    for key in sorted(variables):
        line += f" {key}={quote_value(variables[key])}"
    return line

def build_sections(hosts: list[InventoryHost], groups: list[InventoryGroup]) -> tuple[list[GroupSection], Diagnostics]:
    """
    Merges hosts and groups into sorted group sections. Every group that is declared or
    referenced by a host gets exactly one section, even if it has neither hosts,
    variables nor children. Records without a name are reported and skipped.

    Parameters
    ----------
    hosts
        The host records. Hosts without groups are placed into `DEFAULT_HOST_GROUP`.
    groups
        The group records.

    Returns
    -------
    tuple[list[GroupSection], Diagnostics]
        The sections sorted by group name and the diagnostics.
    """
    diags: Diagnostics = []
    group_names: set[str] = set()
    group_hosts: dict[str, list[str]] = {}
    group_vars: dict[str, dict[str, str]] = {}
    group_children: dict[str, list[str]] = {}

    for group in groups:
        if group.name == "":
            diags.append(error("Inventory group is missing a name"))
            continue

        group_names.add(group.name)
        if len(group.children) > 0:
            group_children[group.name] = list(group.children)
        if len(group.variables) > 0:
            group_vars[group.name] = dict(group.variables)

    for host in hosts:
        if host.name == "":
            diags.append(error("Inventory host is missing a name"))
            continue

        host_groups = host.groups if len(host.groups) > 0 else [DEFAULT_HOST_GROUP]
        line = format_host_line(host.name, host.variables)
        for group_name in host_groups:
            if group_name == "":
                continue

            group_names.add(group_name)
            group_hosts.setdefault(group_name, []).append(line)

    sections = []
    for name in sorted(group_names):
        variables = group_vars.get(name, {})
        sections.append(GroupSection(
            name=name,
            host_lines=sorted(group_hosts.get(name, [])),
            variables=[(key, variables[key]) for key in sorted(variables)],
            children=sorted(group_children.get(name, []))))
    return sections, diags

def build_inventory_content(hosts: list[InventoryHost], groups: list[InventoryGroup]) -> tuple[str, Diagnostics]:
    """
    Renders the given hosts and groups into an INI-style inventory document.
    Identical input always results in identical output.

    Parameters
    ----------
    hosts
        The host records.
    groups
        The group records.

    Returns
    -------
    tuple[str, Diagnostics]
        The rendered document and the diagnostics. The document contains
        everything that was valid, even if diagnostics were reported.
    """
    sections, diags = build_sections(hosts, groups)
    return _inventory_template.render(sections=sections), diags

def default_hosts(hostname: str, port: Optional[int], hostgroups: Any) -> tuple[list[InventoryHost], Diagnostics]:
    """
    Synthesizes the single host that is used when no explicit hosts are given.

    Parameters
    ----------
    hostname
        The name of the host.
    port
        The ssh port. If not None, it is exposed as the `ansible_port` host variable.
    hostgroups
        The raw list of group names for the host. Non-string entries are reported
        and dropped. If no group remains, `DEFAULT_HOST_GROUP` is used.

    Returns
    -------
    tuple[list[InventoryHost], Diagnostics]
        A list containing exactly the synthesized host, and the diagnostics.
    """
    groups, diags = to_string_list(hostgroups)
    if len(groups) == 0:
        groups = [DEFAULT_HOST_GROUP]

    variables = {}
    if port is not None:
        variables["ansible_port"] = str(port)

    return [InventoryHost(name=hostname, groups=groups, variables=variables)], diags

def verbose_switch(verbosity: int) -> str:
    """
    Returns the verbosity switch for the given level,
    e.g. `""` for 0 or `"-vv"` for 2.
    """
    if verbosity == 0:
        return ""
    return "-" + "v" * verbosity

def playbook_command(playbook: str, inventory: str, verbosity: int = 0) -> list[str]:
    """Returns the ansible-playbook command line that runs the playbook on the given inventory."""
    command = ["ansible-playbook", "-i", inventory]
    switch = verbose_switch(verbosity)
    if switch:
        command.append(switch)
    command.append(playbook)
    return command
