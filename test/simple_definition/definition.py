from playbook_inventory.types import InventoryGroup

hostname = "fallback.local"
port = 2222

hosts = [
    dict(name="web1", groups=["web"], variables=dict(ansible_host="10.0.0.1")),
    dict(name="db1", groups=["db"]),
]

groups = [
    InventoryGroup(name="servers", children=["web", "db"]),
    dict(name="web", variables=dict(http_port="80")),
]
