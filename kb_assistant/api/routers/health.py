"""
Health check API endpoints.

Routes: GET /, GET /health

System role: Liveness HTTP API
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text banner."""
    return "RAG Assistant Backend Running"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="ok")
