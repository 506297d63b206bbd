# app/api/v1/router.py
from fastapi import APIRouter

from app.modules.users.router import router as users_router
from app.modules.parcels.router import router as parcels_router
from app.modules.riders.router import router as riders_router, assignment_router
from app.modules.rider_applications.router import router as rider_applications_router
from app.modules.tracking.router import router as tracking_router
from app.modules.payments.router import router as payments_router, intent_router
from app.modules.stats.router import router as stats_router


api_router = APIRouter()

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)

api_router.include_router(
    parcels_router,
    prefix="/parcels",
    tags=["Parcels"]
)

api_router.include_router(
    assignment_router,
    tags=["Dispatch"]
)

api_router.include_router(
    riders_router,
    prefix="/riders",
    tags=["Riders"]
)

api_router.include_router(
    rider_applications_router,
    prefix="/riderApplications",
    tags=["Rider Applications"]
)

api_router.include_router(
    tracking_router,
    prefix="/tracking",
    tags=["Tracking"]
)

api_router.include_router(
    payments_router,
    prefix="/payments",
    tags=["Payments"]
)

api_router.include_router(
    intent_router,
    tags=["Payments"]
)

api_router.include_router(
    stats_router,
    prefix="/stats",
    tags=["Stats"]
)
