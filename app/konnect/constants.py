"""
Central constants for the Konnect dashboard.
"""
from __future__ import annotations

# Audit trail event kinds
EVENT_CREATE = "Create"
EVENT_DELETE = "Delete"
EVENT_UPDATE = "Update"
EVENT_DOWNLOAD = "Download"
EVENT_LOGIN = "Login"
EVENT_LOGOUT = "Logout"
EVENT_RESET = "Reset"

AUDIT_EVENTS = frozenset(
    {EVENT_CREATE, EVENT_DELETE, EVENT_UPDATE, EVENT_DOWNLOAD, EVENT_LOGIN, EVENT_LOGOUT, EVENT_RESET}
)

# Audit trail categories (entity type names as shown in the dashboard)
CATEGORY_USER = "User"
CATEGORY_TENANT = "Tenant"
CATEGORY_FLEET = "Fleet"
CATEGORY_ROUTER = "Router"
CATEGORY_HOTSPOT_USER = "Hotspot User"
CATEGORY_FIREWALL_TEMPLATE = "Firewall Template"

# Performer recorded for actions nobody is logged in for
SYSTEM_PERFORMER = "System"

ROLE_USER = "user"
ROLE_ADMIN = "admin"

# Largest value a BIGINT column accepts
MAX_DB_INT = 2**63 - 1

MIN_PASSWORD_LENGTH = 6
DEFAULT_TOP_TENANTS = 5

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link will be sent."
