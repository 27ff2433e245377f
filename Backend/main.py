import logging

from moodjournal.profiles import routes as profiles_router
from moodjournal.entries import routes as entries_router
from moodjournal.analytics import routes as analytics_router
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from moodjournal.core.config import ALLOWED_ORIGINS, LOG_LEVEL
from moodjournal.core.database import Base, engine

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mood Journal API",
    version="1.0.0",
    description="Backend for the mood journal: entries, profiles, calendar search and mood analytics.",
)

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(profiles_router.router)
app.include_router(entries_router.router)
app.include_router(analytics_router.router)


# DB Tables
@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
