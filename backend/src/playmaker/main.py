"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from playmaker.config import settings
from playmaker.api.routes.adaptation import router as adaptation_router
from playmaker.api.routes.animation import router as animation_router

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title="Playmaker",
    description="Play simulation and roster adaptation engine",
    version="0.1.0",
)

# Configure CORS for the coaching frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "playmaker"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Playmaker API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(animation_router)
app.include_router(adaptation_router)
