import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scaleadvisor.config import config
from scaleadvisor.config.database import async_engine, Base
from scaleadvisor import models  # noqa: F401  (registers tables on Base)
from scaleadvisor.auth import router as auth_router
from scaleadvisor.routers import (
    projects, recommendations, roadmap, configurations,
    security, estimates, templates, exports,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App Init ----------
app = FastAPI(
    title=config.APP_NAME,
    description="Scaling advisor backend: recommendations, roadmaps, configs, security and cost estimates",
    version="1.0.0",
)

# ---------- Startup ----------
@app.on_event("startup")
async def on_startup():
    logger.info("Creating database tables...")
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created.")

# ---------- CORS ----------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Routers ----------
app.include_router(auth_router)
app.include_router(projects.router)
app.include_router(recommendations.router)
app.include_router(roadmap.router)
app.include_router(configurations.router)
app.include_router(security.router)
app.include_router(estimates.router)
app.include_router(templates.router)
app.include_router(exports.router)

# ---------- Health Check ----------
@app.get("/")
def root():
    return {
        "message": f"{config.APP_NAME} is running",
        "environment": config.APP_ENV,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("scaleadvisor.main:app", host="0.0.0.0", port=config.APP_PORT, reload=config.APP_ENV == "development")
