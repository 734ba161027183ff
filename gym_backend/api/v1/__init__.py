"""API v1 module."""

from fastapi import APIRouter

from gym_backend.api.v1.endpoints import (
    auth,
    users,
    gyms,
    members,
    trainers,
    membership_plans,
    memberships,
    payments,
    attendance,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(gyms.router, prefix="/gyms", tags=["Gyms"])
api_router.include_router(members.router, prefix="/members", tags=["Members"])
api_router.include_router(trainers.router, prefix="/trainers", tags=["Trainers"])
api_router.include_router(
    membership_plans.router, prefix="/membership-plans", tags=["Membership Plans"]
)
api_router.include_router(memberships.router, prefix="/memberships", tags=["Memberships"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
