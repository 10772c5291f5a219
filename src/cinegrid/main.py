"""FastAPI application entry point."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinegrid.api.routes import health, imports
from cinegrid.config import settings

# Create FastAPI app
app = FastAPI(
    title="Cinegrid API",
    description="Weekly cinema schedule spreadsheet import",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:5174",
    ],  # Admin frontend development server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(imports.router, prefix="/api", tags=["import"])


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")
    uvicorn.run("cinegrid.main:app", host=settings.api_host, port=settings.api_port)
