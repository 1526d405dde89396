"""API routes."""

from fastapi import APIRouter

from complaintdesk.api import auth, complaints, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(complaints.router, prefix="/complaints", tags=["complaints"])
