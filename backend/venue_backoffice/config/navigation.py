"""
Vendor back-office sidebar definition.

Every entry names the permission required to see it. Entries marked
``owner_only`` are reserved for the vendor owner account.
"""
from types import MappingProxyType

# Shown to any authenticated vendor principal regardless of granted permissions
ALWAYS_VISIBLE_PERMISSIONS = frozenset({"vendor_view_dashboard"})


def _item(name, href, permission=None, owner_only=False, children=()):
    return MappingProxyType({
        "name": name,
        "href": href,
        "permission": permission,
        "owner_only": owner_only,
        "children": tuple(children),
    })


VENDOR_NAVIGATION = (
    _item("Dashboard", "/vendor/", "vendor_view_dashboard", children=(
        _item("Overview", "/vendor/", "vendor_view_dashboard"),
        _item("Ledger", "/vendor/ledger", "vendor_view_ledger"),
    )),
    _item("Venues", "/vendor/venues", "vendor_view_venues"),
    _item("Bookings", "/vendor/bookings", "vendor_view_bookings"),
    _item("Calendar", "/vendor/calendar", "vendor_view_calendar"),
    _item("Blocked Dates", "/vendor/blocked-dates", "vendor_view_blocked_dates"),
    _item("Reviews", "/vendor/reviews", "vendor_view_reviews"),
    _item("Payouts", "/vendor/payouts", "vendor_view_payouts"),
    _item("Staff", "/vendor/staff", owner_only=True, children=(
        _item("Roles", "/vendor/roles", owner_only=True),
        _item("Staff", "/vendor/staff", owner_only=True),
    )),
    _item("Settings", "/vendor/settings", "vendor_view_profile"),
)
