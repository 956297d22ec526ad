"""
SQLAlchemy models for the Travloger back-office.
"""

from travloger.models.base import Base, RecordBase, TimestampMixin, AuditMixin
from travloger.models.employee import Employee, EmployeeSession
from travloger.models.location import (
    HotelLocation,
    VehicleLocation,
    Vehicle,
    FixedLocation,
    FixedDay,
    FixedPlan,
    FixedPlanOption,
)
from travloger.models.hotel import Hotel, HotelRate
from travloger.models.package import Package
from travloger.models.lead import Lead
from travloger.models.booking import Booking
from travloger.models.payment import QueryPayment
from travloger.models.itinerary import Itinerary, ItineraryDay, ItineraryEvent
from travloger.models.transfer import Transfer, TransferRate
from travloger.models.supplier import Supplier
from travloger.models.destination import Destination
from travloger.models.cms import (
    Activity,
    MealPlan,
    RoomType,
    PackageTheme,
    QueryStatus,
    DayItinerary,
)
from travloger.models.city_content import CityContent

__all__ = [
    "Base",
    "RecordBase",
    "TimestampMixin",
    "AuditMixin",
    "Employee",
    "EmployeeSession",
    "HotelLocation",
    "VehicleLocation",
    "Vehicle",
    "FixedLocation",
    "FixedDay",
    "FixedPlan",
    "FixedPlanOption",
    "Hotel",
    "HotelRate",
    "Package",
    "Lead",
    "Booking",
    "QueryPayment",
    "Itinerary",
    "ItineraryDay",
    "ItineraryEvent",
    "Transfer",
    "TransferRate",
    "Supplier",
    "Destination",
    "Activity",
    "MealPlan",
    "RoomType",
    "PackageTheme",
    "QueryStatus",
    "DayItinerary",
    "CityContent",
]
