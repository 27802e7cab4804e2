"""API version 1 routes."""

from fastapi import APIRouter

from statement_extractor.api.v1 import extract

router = APIRouter(prefix="/api/v1")

router.include_router(extract.router)
