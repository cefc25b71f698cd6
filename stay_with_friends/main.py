# stay_with_friends/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stay_with_friends.config import ALLOWED_ORIGINS
from stay_with_friends.logging_config import setup_logging
from stay_with_friends.middleware import RequestIDMiddleware
from stay_with_friends.routes.availability import router as availability_router
from stay_with_friends.routes.bookings import router as bookings_router
from stay_with_friends.routes.connections import router as connections_router
from stay_with_friends.routes.health import router as health_router
from stay_with_friends.routes.invitations import router as invitations_router
from stay_with_friends.routes.metrics import router as metrics_router
from stay_with_friends.routes.stats import router as stats_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Stay With Friends API",
    description="Availability calendars, stay requests and the friends network",
    version="1.0.0",
)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(availability_router, prefix="/api", tags=["Availability"])
app.include_router(bookings_router, prefix="/api", tags=["Bookings"])
app.include_router(connections_router, prefix="/api", tags=["Connections"])
app.include_router(invitations_router, prefix="/api", tags=["Invitations"])
app.include_router(stats_router, prefix="/api", tags=["Stats"])
