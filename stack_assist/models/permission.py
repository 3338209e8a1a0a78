"""Team member permission vocabulary."""

from enum import Enum as PyEnum


class Module(str, PyEnum):
    """
    Dashboard modules a team member can be granted.

    Each maps to one resource router. Team management, notification
    settings and scans are not modules; they stay owner-only.
    """

    CLIENTS = "clients"
    SITES = "sites"
    HOSTING = "hosting"
    MOBILE_APPS = "mobile_apps"
    DEVELOPER_ACCOUNTS = "developer_accounts"
    TASKS = "tasks"


class Action(str, PyEnum):
    """Write actions gated by the can_create / can_edit / can_delete flags"""

    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


def default_permissions() -> dict:
    """Permissions proposed for a new invite: create only, no modules."""
    return {
        "can_create": True,
        "can_edit": False,
        "can_delete": False,
        "modules": {module.value: False for module in Module},
    }
