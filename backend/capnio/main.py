import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capnio import __version__
from capnio.config import CORS_ORIGINS, SEED_DEMO_DATA
from capnio.database import create_tables, get_session
from capnio.logging_config import setup_logging
from capnio.routes.catalog import router as catalog_router
from capnio.routes.machines import router as machines_router
from capnio.routes.sites import router as sites_router
from capnio.services.seed_service import seed_demo_data

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Capnio Monitoring", version=__version__)
logger.info("FastAPI app created")

# Include routers
app.include_router(sites_router)
app.include_router(machines_router)
app.include_router(catalog_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info("Capnio Monitoring starting up")
    await create_tables()
    if SEED_DEMO_DATA:
        async with get_session() as session:
            await seed_demo_data(session)
    logger.info("API docs available at http://localhost:8000/docs")


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
