"""Identity presentation layer.

Organizes presentation concerns by aggregate. Each aggregate package
contains its own routes and models; this module mounts them under /api.
"""

from __future__ import annotations

from fastapi import APIRouter

from identity.presentation import users

router = APIRouter(prefix="/api")

router.include_router(users.router)

__all__ = ["router"]
