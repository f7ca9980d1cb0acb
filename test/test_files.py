import os
import tempfile

import pytest

import playbook_inventory.files
from playbook_inventory.files import build_playbook_inventory, create_temp, get_all_inventories, remove_file, render_playbook_inventory
from playbook_inventory.types import InventoryGroup, InventoryHost

@pytest.fixture
def temp_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return tmp_path

def summaries(diags):
    return [d.summary for d in diags]

def test_create_temp_pattern(temp_dir):
    path, handle = create_temp(".inventory-*.ini")
    handle.close()
    name = os.path.basename(path)
    assert os.path.dirname(path) == str(temp_dir)
    assert name.startswith(".inventory-")
    assert name.endswith(".ini")
    assert len(name) > len(".inventory-.ini")

def test_create_temp_without_star(temp_dir):
    path, handle = create_temp("inv")
    handle.close()
    name = os.path.basename(path)
    assert name.startswith("inv")
    assert len(name) > len("inv")

    other, handle = create_temp("inv")
    handle.close()
    assert other != path

def test_build_playbook_inventory(temp_dir):
    path, diags = build_playbook_inventory(".inventory-*.ini", "10.0.0.5", 22, [], [], [])
    assert diags == []
    assert os.path.dirname(path) == str(temp_dir)
    with open(path, "r", encoding="utf-8") as f:
        assert f.read() == '[default]\n10.0.0.5 ansible_port="22"\n\n'

def test_build_playbook_inventory_explicit_hosts(temp_dir):
    _ = temp_dir
    path, diags = build_playbook_inventory("inv-*", "ignored", 22, ["ignored"],
        [InventoryHost(name="node1", groups=["web"])],
        [InventoryGroup(name="web", variables={"ansible_user": "deploy"})])
    assert diags == []
    with open(path, "r", encoding="utf-8") as f:
        assert f.read() == '[web]\nnode1\n\n[web:vars]\nansible_user="deploy"\n\n'

def test_build_playbook_inventory_create_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "missing"))
    path, diags = build_playbook_inventory("inv-*", "", None, [], [], [])
    assert path == ""
    assert len(diags) == 2
    assert diags[0].summary.startswith("Fail to create inventory file:")
    assert diags[1].summary == "Inventory host is missing a name"

def test_build_playbook_inventory_write_failure(temp_dir, monkeypatch):
    class FailingHandle:
        def __enter__(self):
            return self

        def __exit__(self, *args):
            return False

        def write(self, content):
            raise OSError("disk full")

    target = str(temp_dir / "inv-broken")
    monkeypatch.setattr(playbook_inventory.files, "create_temp", lambda pattern: (target, FailingHandle()))
    path, diags = build_playbook_inventory("inv-*", "host", None, [], [], [])
    assert path == target
    assert summaries(diags) == ["Fail to write inventory: disk full"]

def test_render_playbook_inventory():
    content, diags = render_playbook_inventory("10.0.0.5", None, ["edge", 1], [], [])
    assert summaries(diags) == ["Error: couldn't parse value to string!"]
    assert content == "[edge]\n10.0.0.5\n\n"

def test_get_all_inventories(temp_dir):
    for name in ["inv-b", "other", "inv-a"]:
        (temp_dir / name).write_text("")

    inventories, diags = get_all_inventories("inv-")
    assert diags == []
    assert inventories == [str(temp_dir / "inv-a"), str(temp_dir / "inv-b")]

def test_get_all_inventories_missing_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "missing"))
    inventories, diags = get_all_inventories("inv-")
    assert inventories == []
    assert len(diags) == 1
    assert diags[0].summary.startswith(f"Fail to read dir {tmp_path / 'missing'}:")

def test_created_inventories_are_listed_and_removed(temp_dir):
    _ = temp_dir
    path, _ = build_playbook_inventory("inv-*", "host", None, [], [], [])
    inventories, _ = get_all_inventories("inv-")
    assert inventories == [path]

    assert remove_file(path) == []
    assert not os.path.exists(path)
    assert get_all_inventories("inv-") == ([], [])

def test_remove_missing_file(tmp_path):
    missing = str(tmp_path / "nope")
    diags = remove_file(missing)
    assert len(diags) == 1
    assert diags[0].summary.startswith(f"Fail to remove file {missing}:")
