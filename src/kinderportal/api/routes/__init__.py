"""API route modules, each exposing a `router`."""

from fastapi import APIRouter

from . import (
    auth,
    billing,
    chat,
    children,
    dashboard,
    events,
    notifications,
    staff,
    structure,
    trusted_contacts,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(children.router, prefix="/children", tags=["Children"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
api_router.include_router(billing.router, tags=["Billing"])
api_router.include_router(structure.router, tags=["Structure"])
api_router.include_router(staff.router, prefix="/staff", tags=["Staff"])
api_router.include_router(chat.router, tags=["Chat"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(
    trusted_contacts.router, prefix="/trusted-contacts", tags=["Trusted Contacts"]
)
api_router.include_router(events.router, tags=["Events"])

__all__ = ["api_router"]
