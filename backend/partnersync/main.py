"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from partnersync.config import get_settings
from partnersync.database import init_db
from partnersync.errors import register_error_handlers
from partnersync.logging_config import configure_logging
from partnersync.routers import auth, collab, projects, reports, sdg

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


app = FastAPI(
    title="PartnerSync API",
    description="Partner organization registry, SDG project tracking and impact reporting",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(reports.router)
app.include_router(sdg.router)
app.include_router(collab.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "PartnerSync API is running..."


@app.get("/health")
async def health():
    return {"status": "ok"}
