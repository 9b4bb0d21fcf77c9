# permissions/roles.py

from __future__ import annotations

# =========================================================
# ROLE CONSTANTS (SESSION ROLES)
# =========================================================
# admin: single built-in identity (catalog, staff, reports)
# cashier: stored staff account (checkout only)
ROLE_ADMIN = "admin"
ROLE_CASHIER = "cashier"

SESSION_ROLES = {
    ROLE_ADMIN,
    ROLE_CASHIER,
}

ROLE_CHOICES = [
    (ROLE_ADMIN, "Admin"),
    (ROLE_CASHIER, "Cashier"),
]


# =========================================================
# CAPABILITIES
# =========================================================
CAP_POS_SELL = "pos.sell"
CAP_CATALOG_EDIT = "catalog.edit"
CAP_STAFF_MANAGE = "staff.manage"
CAP_REPORTS_VIEW = "reports.view"

ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        CAP_CATALOG_EDIT,
        CAP_STAFF_MANAGE,
        CAP_REPORTS_VIEW,
    },
    ROLE_CASHIER: {
        CAP_POS_SELL,
    },
}


def capabilities_for(role: str | None) -> set[str]:
    return set(ROLE_CAPABILITIES.get(role, set()))


def session_can(session, capability: str) -> bool:
    """
    Capability check for a Session descriptor (or None when signed out).
    The surrounding application uses this to route UI state.
    """
    if session is None:
        return False
    return capability in capabilities_for(getattr(session, "role", None))
