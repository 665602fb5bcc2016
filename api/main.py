import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from api.errors import install_exception_handlers
from api.routers import actors, genres, movies
from db.postgres import pool, check_postgres

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan handler for connection pool lifecycle management.

    Opens the Postgres connection pool on startup and closes it gracefully on shutdown.
    """
    # Open the pool and establish initial connections
    await pool.open()
    # Validate that connections actually work (fast-fail if Postgres is unreachable)
    await pool.check()
    logger.info("Postgres connection pool ready")
    yield
    await pool.close()
    logger.info("Postgres connection pool closed")


app = FastAPI(title="Movie Catalog API", lifespan=lifespan)
install_exception_handlers(app)
app.include_router(genres.router)
app.include_router(movies.router)
app.include_router(actors.router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint that validates connectivity to the database.

    Returns a dictionary with status for each service:
    - postgres: 'ok' or error message (checked via connection pool)
    """
    return {"postgres": await check_postgres()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
