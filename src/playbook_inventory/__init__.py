"""
The main module of playbook_inventory.

Renders host and group definitions into an INI-style inventory
for ansible-playbook and manages the temporary files holding them.
"""
