"""
Travloger Back-Office API - Main application entry point.

Admin panel and employee portal backend: packages and itineraries, employees,
leads, bookings, payment links and the reference-data CMS.
"""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travloger.api import (
    auth,
    bookings,
    city_content,
    cms,
    destinations,
    emails,
    employees,
    hotels,
    itineraries,
    leads,
    locations,
    packages,
    payments,
    query_payments,
    setup,
    suppliers,
    transfers,
    uploads,
)
from travloger.config import get_settings
from travloger.database import create_tables
from travloger.services.session_service import cleanup_expired_sessions

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("travloger")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info(f"Starting {settings.app_name}...")

    if settings.auto_create_tables:
        await create_tables()

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            cleanup_expired_sessions,
            trigger=IntervalTrigger(minutes=settings.session_cleanup_interval_minutes),
            id="session_cleanup",
            name="Remove stale employee sessions",
            replace_existing=True,
        )
        scheduler.start()
        logger.info(
            f"Scheduler started: session cleanup every {settings.session_cleanup_interval_minutes} min"
        )

    yield

    # Shutdown
    if scheduler:
        scheduler.shutdown(wait=False)
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="""
    ## Travloger Back-Office API

    - **Employees**: accounts, portal sessions and performance stats
    - **Leads**: enquiries, assignment to agents, package assignment
    - **Bookings & payments**: Razorpay payment links, callbacks and webhooks
    - **Packages & itineraries**: custom and fixed plans, day-by-day programmes
    - **CMS**: hotels, transfers, activities, destinations and city pages

    ### Authentication
    Endpoints expect a Supabase access token. Use `/api/auth/login` to obtain one.
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])
app.include_router(leads.router, prefix="/api/leads", tags=["Leads"])
app.include_router(bookings.router, prefix="/api/bookings", tags=["Bookings"])
app.include_router(payments.router, prefix="/api/payments", tags=["Payments"])
app.include_router(query_payments.router, prefix="/api/query-payments", tags=["Payments"])
app.include_router(packages.router, prefix="/api/packages", tags=["Packages"])
app.include_router(locations.router, prefix="/api", tags=["Package Catalog"])
app.include_router(itineraries.router, prefix="/api/itineraries", tags=["Itineraries"])
app.include_router(itineraries.quotation_router, prefix="/api/quotation", tags=["Quotation"])
app.include_router(hotels.router, prefix="/api/hotels", tags=["Hotels"])
app.include_router(hotels.rates_router, prefix="/api/hotel-rates", tags=["Hotels"])
app.include_router(transfers.router, prefix="/api/transfers", tags=["Transfers"])
app.include_router(transfers.rates_router, prefix="/api/transfer-rates", tags=["Transfers"])
app.include_router(cms.activities_router, prefix="/api/activities", tags=["Activities"])
app.include_router(cms.meal_plans_router, prefix="/api/meal-plans", tags=["Meal Plans"])
app.include_router(cms.room_types_router, prefix="/api/room-types", tags=["Room Types"])
app.include_router(cms.package_themes_router, prefix="/api/package-themes", tags=["Package Themes"])
app.include_router(cms.query_statuses_router, prefix="/api/query-statuses", tags=["Query Statuses"])
app.include_router(cms.day_itineraries_router, prefix="/api/day-itineraries", tags=["Day Itineraries"])
app.include_router(suppliers.router, prefix="/api/suppliers", tags=["Suppliers"])
app.include_router(destinations.router, prefix="/api/destinations", tags=["Destinations"])
app.include_router(city_content.router, prefix="/api/cms/cities", tags=["City Content"])
app.include_router(uploads.router, prefix="/api/upload", tags=["Uploads"])
app.include_router(emails.router, prefix="/api/email", tags=["Email"])
app.include_router(setup.router, prefix="/api/setup", tags=["Setup"])


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "payments": "configured" if settings.razorpay_key_id else "not_configured",
        "email": "configured" if settings.sendgrid_api_key else "simulated",
        "auth": "configured" if settings.supabase_url else "not_configured",
    }
