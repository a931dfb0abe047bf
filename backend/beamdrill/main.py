import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beamdrill.config import get_settings
from beamdrill.api.routes import problems

settings = get_settings()

logging.basicConfig(
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    level=settings.log_level,
)

app = FastAPI(
    title=settings.app_name,
    description="Randomised structural mechanics drill problems",
    version="0.1.0",
)

# CORS middleware - frontend dev server plus the configured origin
cors_origins = [
    settings.frontend_url,
    "http://localhost:5173",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(problems.router, prefix="/api/problems", tags=["Problems"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}


@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "health": "/health",
    }
