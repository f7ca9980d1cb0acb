"""Stores all global state."""

import argparse
from typing import cast

args: argparse.Namespace = cast(argparse.Namespace, None)
"""
The parsed command line arguments. This is None unless the command line
interface is used, so library code must not rely on it being set.
"""
