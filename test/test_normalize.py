from playbook_inventory.inventory import build_inventory_content
from playbook_inventory.normalize import expand_inventory_groups, expand_inventory_hosts, to_string_list, to_string_map
from playbook_inventory.types import InventoryGroup, InventoryHost, Severity

def summaries(diags):
    return [d.summary for d in diags]

def test_to_string_list():
    values, diags = to_string_list(["a", None, "b", 3])
    assert values == ["a", "b"]
    assert summaries(diags) == ["Error: couldn't parse value to string!"] * 2
    assert all(d.severity == Severity.ERROR for d in diags)

def test_to_string_map():
    values, diags = to_string_map({"ok": "1", "bad": 1, "also_ok": ""})
    assert values == {"ok": "1", "also_ok": ""}
    assert summaries(diags) == ["Couldn't parse variable bad to string"]

def test_expand_hosts():
    hosts, diags = expand_inventory_hosts([
        {"name": "a", "groups": ["x", 1], "variables": {"k": "v", "n": 2}},
        "bogus",
        {"groups": ["y"]},
        {"name": ""},
        {"name": 5},
    ])
    assert hosts == [InventoryHost(name="a", groups=["x"], variables={"k": "v"})]
    assert summaries(diags) == [
        "Error: couldn't parse value to string!",
        "Couldn't parse variable n to string",
        "Invalid host definition: expected map input",
        "Invalid host definition: missing 'name'",
        "Invalid host definition: missing 'name'",
        "Invalid host definition: missing 'name'",
    ]

def test_expand_hosts_defaults():
    hosts, diags = expand_inventory_hosts([{"name": "a"}, {"name": "b", "groups": "web", "variables": ["no", "map"]}])
    assert diags == []
    assert hosts == [InventoryHost(name="a"), InventoryHost(name="b")]

def test_expand_hosts_passes_records_through():
    host = InventoryHost(name="a", groups=["g"])
    hosts, diags = expand_inventory_hosts([host, ("name", "a")])
    assert hosts[0] is host
    assert summaries(diags) == ["Invalid host definition: expected map input"]

def test_expand_groups():
    groups, diags = expand_inventory_groups([
        {"name": "servers", "children": ["web", None, "db"]},
        {"name": "web", "variables": {"http_port": "80", "workers": 4}},
        {"children": ["x"]},
        ["not", "a", "map"],
        InventoryGroup(name="db"),
    ])
    assert groups == [
        InventoryGroup(name="servers", children=["web", "db"]),
        InventoryGroup(name="web", variables={"http_port": "80"}),
        InventoryGroup(name="db"),
    ]
    assert summaries(diags) == [
        "Error: couldn't parse value to string!",
        "Couldn't parse variable workers to string",
        "Invalid group definition: missing 'name'",
        "Invalid group definition: expected map input",
    ]

def test_malformed_entry_resilience():
    hosts, diags = expand_inventory_hosts([{"name": "ok"}, {"groups": ["x"]}])
    content, build_diags = build_inventory_content(hosts, [])
    assert len(diags) == 1
    assert build_diags == []
    assert content == "[default]\nok\n\n"
