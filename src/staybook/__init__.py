"""STAYBOOK

Reservation and workflow core for a property-rental marketplace.
It guards booking consistency (no overlapping stays, single-use coupons),
drives the support-ticket and role-change workflows, and fans domain events
out to notification listeners.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
