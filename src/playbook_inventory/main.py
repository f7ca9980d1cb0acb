"""
Provides the top-level logic of playbook_inventory such as
the CLI interface and the dispatching of the requested action.
"""

import argparse
import os
import shlex
import sys
from datetime import datetime
from typing import Any, Callable, NoReturn, Optional

from playbook_inventory import globals as G
from playbook_inventory import logger
from playbook_inventory.files import build_playbook_inventory, get_all_inventories, remove_file, render_playbook_inventory
from playbook_inventory.inventory import playbook_command
from playbook_inventory.loader import InventoryDefinition, load_definition
from playbook_inventory.logger import col
from playbook_inventory.types import Diagnostics, has_errors
from playbook_inventory.utils import FatalError, die_error, print_status, print_table
from playbook_inventory.version import version

def _exit_with(diags: Diagnostics, loc: str = "") -> NoReturn:
    """Prints the given diagnostics and exits with status 1 if any of them is an error."""
    logger.print_diagnostics(diags, loc=loc)
    sys.exit(1 if has_errors(diags) else 0)

def main_build(args: argparse.Namespace) -> None:
    """
    Main method used to build an inventory from a definition
    and the fallback parameters given on the command line.

    Parameters
    ----------
    args
        The parsed arguments
    """
    diags: Diagnostics = []
    definition = InventoryDefinition()
    if args.definition is not None:
        try:
            definition, load_diags = load_definition(args.definition)
        except FatalError as e:
            die_error(str(e), loc=e.loc)
        logger.print_diagnostics(load_diags, loc=args.definition)
        diags.extend(load_diags)

    # Command line parameters take precedence over the definition
    hostname = args.hostname if args.hostname is not None else (definition.hostname or "")
    port = args.port if args.port is not None else definition.port
    host_groups = args.groups if args.groups else definition.host_groups
    logger.debug_args("Fallback host", dict(hostname=hostname, port=port, groups=host_groups))

    if args.dry:
        content, render_diags = render_playbook_inventory(hostname, port, host_groups, definition.hosts, definition.groups)
        print(content, end="")
        logger.print_diagnostics(render_diags)
        sys.exit(1 if has_errors(diags + render_diags) else 0)

    path, build_diags = build_playbook_inventory(args.pattern, hostname, port, host_groups, definition.hosts, definition.groups)
    if path:
        print_status("inventory", path)
    if args.playbook is not None and path:
        print(shlex.join(playbook_command(args.playbook, path, args.verbose)))
    logger.print_diagnostics(build_diags)
    sys.exit(1 if has_errors(diags + build_diags) else 0)

def list_inventories(prefix: str) -> None:
    """
    Display all inventories in the temporary directory that start with the given prefix.

    Parameters
    ----------
    prefix
        The file name prefix of the inventories.
    """
    inventories, diags = get_all_inventories(prefix)

    col_blue   = col("\033[34m")
    col_green  = col("\033[32m")
    col_darker = col("\033[90m")
    col_reset  = col("\033[m")

    table = []
    for path in inventories:
        try:
            stat = os.stat(path)
        except OSError:
            # Removed between listing and now
            continue
        modified = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        table.append([[col_green, path, col_reset], [col_darker, str(stat.st_size), col_reset], [col_darker, modified, col_reset]])

    if len(table) > 0:
        print_table([[col_blue, "inventory", col_reset],
                     [col_blue, "size", col_reset],
                     [col_blue, "modified", col_reset]],
                     table)
    _exit_with(diags)

def remove_inventory(file: str) -> None:
    """
    Remove the given inventory file.

    Parameters
    ----------
    file
        The path of the inventory.
    """
    diags = remove_file(file)
    if not has_errors(diags):
        print_status("removed", file)
    _exit_with(diags)

class ArgumentParserError(Exception):
    """Error class for argument parsing errors."""

class ThrowingArgumentParser(argparse.ArgumentParser):
    """An argument parser that throws when invalid argument types are passed."""

    def error(self, message: str) -> NoReturn:
        """Raises an exception on error."""
        raise ArgumentParserError(message)

class ActionImmediateFunction(argparse.Action):
    """An action that calls a function immediately when the argument is encountered."""
    def __init__(self, option_strings: Any, func: Callable[[Any], Any], *args: Any, **kwargs: Any):
        self.func = func
        super().__init__(option_strings, *args, **kwargs)

    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace, values: Any, option_string: Any = None) -> None:
        _ = (parser, option_string)
        # Make the options parsed so far (e.g. --debug, --no-color) visible to the function
        G.args = namespace
        self.func(values)

def main(argv: Optional[list[str]] = None) -> None:
    """
    The main program entry point. This will parse arguments, load the
    definition and write the inventory. Defaults to sys.argv[1:] if argv is None.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = ThrowingArgumentParser(description="Builds an ansible inventory file from host and group definitions.")

    # General options
    parser.add_argument('-V', '--version', action='version',
            version=f"%(prog)s version {version}")
    parser.add_argument('--debug', dest='debug', action='store_true',
            help="Enable debugging output. Forces verbosity to max value.")
    parser.add_argument('--no-color', dest='no_color', action='store_true',
            help="Disables any color output. Color can also be disabled by setting the NO_COLOR environment variable.")

    # Inventory management options
    parser.add_argument('--list-inventories', metavar='PREFIX', action=ActionImmediateFunction, func=list_inventories,
            help="List all inventories in the temporary directory whose file name starts with PREFIX and exit. Options that should apply must be given before this one.")
    parser.add_argument('--remove', metavar='FILE', action=ActionImmediateFunction, func=remove_inventory,
            help="Remove the given inventory file and exit. Options that should apply must be given before this one.")

    # Build options
    parser.add_argument('--pattern', dest='pattern', default=".inventory-*.ini", type=str,
            help="The file name pattern of the created inventory. The last '*' is replaced by a random string. Defaults to '.inventory-*.ini'.")
    parser.add_argument('--hostname', dest='hostname', default=None, type=str,
            help="The host to use if the definition has no hosts. Overrides the definition's `hostname`.")
    parser.add_argument('--port', dest='port', default=None, type=int,
            help="The port of the fallback host, exposed as `ansible_port`. Overrides the definition's `port`.")
    parser.add_argument('-g', '--group', dest='groups', action='append', default=[],
            help="Adds a group for the fallback host. Can be given multiple times. Overrides the definition's `host_groups`. Defaults to the 'default' group.")
    parser.add_argument('--dry', '--dry-run', '--pretend', dest='dry', action='store_true',
            help="Print the rendered inventory instead of writing it to a file.")
    parser.add_argument('--playbook', dest='playbook', default=None, type=str,
            help="Also print the ansible-playbook command line that runs the given playbook on the created inventory.")
    parser.add_argument('-v', '--verbose', dest='verbose', action='count', default=0,
            help="Increase the verbosity of the printed ansible-playbook command. Can be given multiple times.")
    parser.add_argument('definition', type=str, nargs='?', default=None,
            help="The definition of hosts and groups. Either a python module (`*.py`) or a json file, both may define `hosts`, `groups`, `hostname`, `port` and `host_groups`. If omitted, only the fallback host is used.")
    parser.set_defaults(func=main_build)

    try:
        args: argparse.Namespace = parser.parse_args(argv)
    except ArgumentParserError as e:
        die_error(str(e))

    # Force max verbosity with --debug
    if args.debug:
        args.verbose = 4

    # Disable color when NO_COLOR is set
    if os.getenv("NO_COLOR") is not None:
        args.no_color = True

    G.args = args
    args.func(args)
