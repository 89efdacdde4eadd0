"""Main API router"""

from fastapi import APIRouter

from .routes import (
    auth, users, payments, donations, projects, headquarters, beneficiaries, evaluations,
    testimonials, gallery, site_contents, reports, admin, director, director_sede, public,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(donations.router, prefix="/donations", tags=["donations"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(headquarters.router, prefix="/headquarters", tags=["headquarters"])
api_router.include_router(beneficiaries.router, prefix="/beneficiaries", tags=["beneficiaries"])
api_router.include_router(evaluations.router, prefix="/evaluations", tags=["evaluations"])
api_router.include_router(testimonials.router, prefix="/testimonials", tags=["testimonials"])
api_router.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
api_router.include_router(site_contents.router, prefix="/site-contents", tags=["site-contents"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(director.router, prefix="/director", tags=["director"])
api_router.include_router(director_sede.router, prefix="/director-sede", tags=["director-sede"])
api_router.include_router(public.router, prefix="/public", tags=["public"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": "1.0.0"}
