import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from core.config import settings
from core.db import db_session, get_db, init_db
from core.errors import register_exception_handlers
from core.logging_config import configure_logging
from core.seed import seed_database
from routes.orders import router as orders_router
from routes.products import router as products_router
from routes.users import router as users_router

configure_logging()
logger = logging.getLogger("main")

# Ensure tables exist (schema migrations are out of scope)
init_db()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DATA:
        with db_session() as db:
            seed_database(db)
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Users, products and orders with per-customer yearly revenue",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(users_router)
app.include_router(products_router)
app.include_router(orders_router)


@app.get("/health", tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    db.execute(text("SELECT 1"))
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "database": "reachable",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )
