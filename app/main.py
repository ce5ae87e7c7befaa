import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import auth, ai_employees, hiring, reviews, users, health
from app.core import config
from app.core.exceptions import MarketplaceError
from app.core.logging_config import setup_logging, sanitize_log_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL)
    settings = sanitize_log_data({
        "database_url": config.DATABASE_URL,
        "secret_key": config.SECRET_KEY,
        "run_migrations": config.RUN_MIGRATIONS,
        "cors_origins": config.CORS_ORIGINS,
    })
    logger.info(f"Configuration: {settings}")
    if config.RUN_MIGRATIONS:
        from app.db.migrate import run_migrations
        run_migrations()
    else:
        from app.db.init_db import init_db
        init_db()
    logger.info("AI Employee Marketplace API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="AI Employee Marketplace", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ ERROR RESPONSES
# ============================================

@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg"),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(ai_employees.router)
app.include_router(hiring.router)
app.include_router(reviews.router)
app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {"status": "AI Employee Marketplace API running"}
