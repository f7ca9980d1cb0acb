import argparse

import playbook_inventory.globals as G
from playbook_inventory import logger
from playbook_inventory.types import Diagnostic, Severity, error, has_errors

def test_debug_without_arguments(monkeypatch, capsys):
    monkeypatch.setattr(G, "args", None)
    logger.debug("hidden")
    assert capsys.readouterr().err == ""

def test_debug_enabled(monkeypatch, capsys):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(G, "args", argparse.Namespace(debug=True, no_color=False))
    logger.debug("shown")
    assert capsys.readouterr().err == "   DEBUG: shown\n"

def test_col(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setattr(G, "args", argparse.Namespace(debug=False, no_color=True))
    assert logger.col("\033[1m") == ""
    monkeypatch.setattr(G, "args", None)
    assert logger.col("\033[1m") == "\033[1m"

def test_print_diagnostics(monkeypatch, capsys):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(G, "args", None)
    logger.print_diagnostics([error("broken"), Diagnostic(Severity.WARNING, "careful", "detail")], loc="def.json")
    assert capsys.readouterr().err == "def.json: error: broken\ndef.json: warning: careful: detail\n"

def test_has_errors():
    assert not has_errors([])
    assert not has_errors([Diagnostic(Severity.WARNING, "careful")])
    assert has_errors([Diagnostic(Severity.WARNING, "careful"), error("broken")])
