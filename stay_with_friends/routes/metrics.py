"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP swf_booking_transitions_total Total booking request transitions
        # TYPE swf_booking_transitions_total counter
        swf_booking_transitions_total{status="approved"} 3.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """Expose metrics in Prometheus text-based exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
