"""
Seed script - Creates demo back-office data for development.

Run with: python -m scripts.seed_demo
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travloger.api.auth import get_password_hash
from travloger.api.packages import PackageCreate, build_package
from travloger.database import async_session_maker, create_tables
from travloger.models import (
    Destination,
    Employee,
    FixedDay,
    FixedLocation,
    FixedPlan,
    FixedPlanOption,
    Hotel,
    HotelLocation,
    QueryStatus,
    RoomType,
    Vehicle,
    VehicleLocation,
)
from travloger.utils import slugify

DESTINATIONS = ["Kashmir", "Himachal Pradesh", "Kerala", "Goa"]

QUERY_STATUSES = [
    # name, color, take_note, lock_status, dashboard
    ("New", "#3B82F6", False, False, True),
    ("Follow Up", "#F59E0B", True, False, True),
    ("Confirmed", "#10B981", False, True, True),
    ("Cancelled", "#EF4444", True, True, False),
]

ROOM_TYPES = ["Standard", "Deluxe", "Super Deluxe", "Houseboat"]


async def create_employees(db: AsyncSession) -> list[Employee]:
    """Create demo employees."""
    employees = []
    employee_data = [
        ("Admin User", "admin@travloger.in", None, "admin", "admin123"),
        ("Ravi Sharma", "ravi@travloger.in", "Kashmir", "employee", "ravi1234"),
        ("Meera Nair", "meera@travloger.in", "Kerala", "employee", "meera1234"),
    ]

    for name, email, destination, role, password in employee_data:
        employee = Employee(
            name=name,
            email=email,
            destination=destination,
            role=role,
            password_hash=get_password_hash(password),
            is_first_login=role != "admin",
        )
        db.add(employee)
        employees.append(employee)

    await db.flush()
    print(f"✅ Created {len(employees)} employees")
    return employees


async def create_reference_data(db: AsyncSession) -> None:
    """Destinations, room types and the lead pipeline statuses."""
    for name in DESTINATIONS:
        db.add(Destination(name=name, slug=slugify(name)))
    for name in ROOM_TYPES:
        db.add(RoomType(name=name))
    for name, color, take_note, lock_status, dashboard in QUERY_STATUSES:
        db.add(QueryStatus(
            name=name,
            color=color,
            take_note=take_note,
            lock_status=lock_status,
            dashboard=dashboard,
        ))

    await db.flush()
    print(f"✅ Created {len(DESTINATIONS)} destinations, {len(ROOM_TYPES)} room types, "
          f"{len(QUERY_STATUSES)} query statuses")


async def create_catalog(db: AsyncSession) -> dict:
    """Locations, hotels and vehicles for Kashmir, plus a fixed Kerala plan."""
    hotel_location = HotelLocation(name="Srinagar", city="kashmir")
    vehicle_location = VehicleLocation(
        name="Srinagar Airport",
        city="kashmir",
        rates={"sedan": 3200, "suv": 4500},
    )
    fixed_location = FixedLocation(name="Kochi - Munnar - Alleppey", city="kerala")
    db.add_all([hotel_location, vehicle_location, fixed_location])
    await db.flush()

    hotel = Hotel(
        name="Dal View Resort",
        destination="Kashmir",
        category=4,
        price=7500,
        map_rate=18000,
        eb=2500,
        location_id=hotel_location.id,
    )
    vehicle = Vehicle(vehicle_type="Innova Crysta", rate=4500, ac_extra=500, location_id=vehicle_location.id)
    fixed_day = FixedDay(city="kerala", days=5, label="5 Days / 4 Nights")
    db.add_all([hotel, vehicle, fixed_day])
    await db.flush()

    plan = FixedPlan(city="kerala", fixed_location_id=fixed_location.id, name="Backwater Classic")
    db.add(plan)
    await db.flush()

    option = FixedPlanOption(
        city="kerala",
        fixed_location_id=fixed_location.id,
        fixed_plan_id=plan.id,
        adults=2,
        price_per_person=15999,
        rooms_vehicle="1 room / 1 sedan",
    )
    db.add(option)
    await db.flush()

    print(f"✅ Created catalog: hotel {hotel.name}, vehicle {vehicle.vehicle_type}, plan {plan.name}")
    return {
        "hotel_location": hotel_location,
        "vehicle_location": vehicle_location,
        "hotel": hotel,
        "vehicle": vehicle,
        "fixed_day": fixed_day,
        "fixed_location": fixed_location,
        "plan": plan,
        "option": option,
    }


async def create_packages(db: AsyncSession, catalog: dict) -> None:
    """One package per plan type, built the same way the API builds them."""
    custom = build_package(PackageCreate(
        name="Kashmir Paradise",
        destination="kashmir",
        route="Srinagar - Gulmarg - Pahalgam",
        price=24999,
        original_price=29999,
        days=6,
        nights=5,
        featured=True,
        service_type="Hotel + Cab",
        hotel_location_id=catalog["hotel_location"].id,
        vehicle_location_id=catalog["vehicle_location"].id,
        selected_hotel_id=catalog["hotel"].id,
        selected_vehicle_id=catalog["vehicle"].id,
    ))
    fixed = build_package(PackageCreate(
        name="Kerala Backwaters",
        destination="kerala",
        route="Kochi - Munnar - Alleppey",
        days=5,
        nights=4,
        plan_type="Fixed Plan",
        fixed_days_id=catalog["fixed_day"].id,
        fixed_location_id=catalog["fixed_location"].id,
        fixed_plan_id=catalog["plan"].id,
        fixed_variant_id=catalog["option"].id,
        fixed_adults=2,
        fixed_price_per_person=15999,
        fixed_rooms_vehicle="1 room / 1 sedan",
    ))
    db.add_all([custom, fixed])
    await db.flush()
    print(f"✅ Created packages: {custom.name} (₹{custom.price:,.0f}), {fixed.name} (₹{fixed.price:,.0f} pp)")


async def seed_demo_data():
    """Main seed function."""
    print("🌱 Starting demo data seed...")
    await create_tables()

    async with async_session_maker() as db:
        # Check if data already exists
        result = await db.execute(select(Employee).limit(1))
        if result.scalar_one_or_none():
            print("⚠️  Data already exists. Skipping seed.")
            return

        await create_employees(db)
        await create_reference_data(db)
        catalog = await create_catalog(db)
        await create_packages(db, catalog)

        await db.commit()
        print("✅ Demo data seed completed!")
        print(f"\n📝 Local login credentials (password_hash):")
        print(f"   Admin: admin@travloger.in / admin123")
        print(f"   Employee: ravi@travloger.in / ravi1234")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
