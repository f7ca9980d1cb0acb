"""
Provides utility functions.
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import os
import sys
import uuid
from types import ModuleType
from typing import Collection, NoReturn, Optional

from playbook_inventory.logger import col

class FatalError(Exception):
    """An exception type for fatal errors, optionally including a file location."""
    def __init__(self, msg: str, loc: Optional[str] = None):
        super().__init__(msg)
        self.loc = loc

def print_status(status: str, msg: str) -> None:
    """Prints a message with a (possibly colored) status prefix."""
    print(f"{col('[1;32m')}{status}{col('[m')} {msg}")

def print_error(msg: str, loc: Optional[str] = None) -> None:
    """Prints a message with a (possibly colored) 'error: ' prefix."""
    if loc is None:
        print(f"{col('[1;31m')}error:{col('[m')} {msg}", file=sys.stderr)
    else:
        print(f"{col('[1m')}{loc}: {col('[1;31m')}error:{col('[m')} {msg}", file=sys.stderr)

def die_error(msg: str, loc: Optional[str] = None, status_code: int = 1) -> NoReturn:
    """Prints a message with a colored 'error: ' prefix, and exit with the given status code afterwards."""
    print_error(msg, loc=loc)
    sys.exit(status_code)

def len_ignore_leading_ansi(s: str) -> int:
    """Returns the length of the string or 0 if it starts with `\033[`"""
    return 0 if s.startswith("\033[") else len(s)

def ansilen(ss: Collection[str]) -> int:
    """Returns the length of all strings combined ignoring ansi control sequences"""
    return sum(map(len_ignore_leading_ansi, ss))

def ansipad(ss: Collection[str], pad: int = 0) -> str:
    """Joins an array of string and ansi codes together and pads the result with spaces to at least `pad` characters."""
    return ''.join(ss) + " " * max(0, pad - ansilen(ss))

def print_table(header: Collection[Collection[str]], rows: Collection[Collection[Collection[str]]], box_color: str = "\033[90m") -> None:
    """
    Prints the given rows as an ascii box table. Each cell is a list of
    strings and ansi codes, columns are as wide as their widest cell.
    """
    cols = len(header)
    col_width = [0] * cols
    for i,v in enumerate(header):
        col_width[i] = max(col_width[i], ansilen(v))
    for row in rows:
        for i,v in enumerate(row):
            col_width[i] = max(col_width[i], ansilen(v))

    col_reset = col("\033[m")
    col_box = col(box_color)
    delim = col_box + " │ " + col_reset
    print(delim.join([ansipad(cell, w) for cell,w in zip(header, col_width)]).rstrip())
    print(col_box + "─┼─".join(["─" * w for w in col_width]) + col_reset)
    for row in rows:
        print(delim.join([ansipad(cell, w) for cell,w in zip(row, col_width)]).rstrip())

def load_py_module(file: str) -> ModuleType:
    """
    Loads a module from the given filename and assigns a unique module name to it.
    Calling this function twice for the same file will yield distinct instances.
    """
    module_id = str(uuid.uuid4()).replace('-', '_')
    module_name = f"{os.path.splitext(os.path.basename(file))[0]}__dynamic__{module_id}"
    loader = importlib.machinery.SourceFileLoader(module_name, file)
    spec = importlib.util.spec_from_loader(loader.name, loader)
    if spec is None:
        raise ValueError(f"Failed to load module from file '{file}'")

    mod = importlib.util.module_from_spec(spec)
    loader.exec_module(mod)
    return mod
