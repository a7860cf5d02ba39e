from fastapi import FastAPI, Request, status
import structlog
import uvicorn
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from core.config import settings
from core.logging import configure_logging
from db.database import create_db_and_tables, safe_database_url
from routers.food import router as food_router
from contextlib import asynccontextmanager

logger = structlog.get_logger(__name__)

FOOD_PREFIX = "/api/food"


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await create_db_and_tables()
    logger.info("database_ready", database_url=safe_database_url())
    yield


app = FastAPI(
    title="Food Inventory API",
    description="Search Open Food Facts and keep a local food inventory",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed food requests are client errors: 400 with a per-field breakdown."""
    if not request.url.path.startswith(FOOD_PREFIX):
        return await request_validation_exception_handler(request, exc)

    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("invalid_request", method=request.method, path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": errors},
    )


# Food search + inventory routes
app.include_router(food_router, prefix=FOOD_PREFIX, tags=["food"])


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)
