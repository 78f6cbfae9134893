# src/castgraph/web/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from castgraph import __version__
from castgraph.canon.db import ensure_schema
from castgraph.config import config
from castgraph.core.logging import get_logger, init_logging
from castgraph.web.routes import router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_logging()
    if config.system.auto_migrate:
        await ensure_schema()
    else:
        logger.info("Automatic migrations disabled; assuming schema is current")
    yield


# Create the FastAPI application
app = FastAPI(
    title="CastGraph",
    description="Character relationship graphs inferred from scene text",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":  # pragma: no cover - CLI execution
    import uvicorn

    uvicorn.run("castgraph.web.main:app", host="0.0.0.0", port=config.system.port)
