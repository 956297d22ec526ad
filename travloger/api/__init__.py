"""
API routes package.
"""

from travloger.api import (
    auth,
    employees,
    leads,
    bookings,
    payments,
    query_payments,
    packages,
    locations,
    itineraries,
    hotels,
    transfers,
    cms,
    suppliers,
    destinations,
    city_content,
    uploads,
    emails,
    setup,
)

__all__ = [
    "auth",
    "employees",
    "leads",
    "bookings",
    "payments",
    "query_payments",
    "packages",
    "locations",
    "itineraries",
    "hotels",
    "transfers",
    "cms",
    "suppliers",
    "destinations",
    "city_content",
    "uploads",
    "emails",
    "setup",
]
