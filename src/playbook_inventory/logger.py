"""
Provides logging utilities.
"""

import argparse
import os
import sys
from typing import Any, cast

from playbook_inventory import globals as G
from playbook_inventory.types import Diagnostic, Diagnostics, Severity

def _args_parsed() -> bool:
    return isinstance(cast(Any, G.args), argparse.Namespace)

def col(color_code: str) -> str:
    """Returns the given argument only if color is enabled."""
    use_color = os.getenv("NO_COLOR") is None
    if _args_parsed():
        use_color = use_color and not G.args.no_color

    return color_code if use_color else ""

def debug(msg: str) -> None:
    """Prints the given message only in debug mode."""
    if not _args_parsed() or not G.args.debug:
        return

    print(f"   {col('[1;34m')}DEBUG{col('[m')}: {msg}", file=sys.stderr)

def debug_args(msg: str, args: dict[str, Any]) -> None:
    """Prints all given arguments when in debug mode."""
    if not _args_parsed() or not G.args.debug:
        return

    str_args = ""
    if len(args) > 0:
        str_args = " " + ", ".join(f"{k}={v!r}" for k,v in args.items())

    print(f"   {col('[1;34m')}DEBUG{col('[m')}: {msg}{str_args}", file=sys.stderr)

def print_diagnostic(diag: Diagnostic, loc: str = "") -> None:
    """Prints a single diagnostic to stderr with a (possibly colored) severity prefix."""
    if diag.severity == Severity.ERROR:
        prefix = f"{col('[1;31m')}error:{col('[m')}"
    else:
        prefix = f"{col('[1;33m')}warning:{col('[m')}"

    if loc:
        prefix = f"{col('[1m')}{loc}:{col('[m')} {prefix}"
    print(f"{prefix} {diag}", file=sys.stderr)

def print_diagnostics(diags: Diagnostics, loc: str = "") -> None:
    """Prints all given diagnostics."""
    for diag in diags:
        print_diagnostic(diag, loc=loc)
