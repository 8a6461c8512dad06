import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from foodtrack.app_logging import configure_logging
from foodtrack.config import get_settings
from foodtrack.errors import (
    FoodtrackError, InvalidArgument, NotFound, Forbidden,
    InsufficientQuantity, TransactionTimeout, DatastoreUnavailable,
)
from foodtrack.routers import users, inventory, logs, catalog, resources, chat

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidArgument: 400,
    Forbidden: 403,
    NotFound: 404,
    InsufficientQuantity: 409,
    DatastoreUnavailable: 503,
    TransactionTimeout: 504,
}

app = FastAPI(
    title="Foodtrack API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Build allowed origins list (supports comma-separated FRONTEND_URL for multiple domains)
_origins = ["http://localhost:3000"]
for origin in settings.FRONTEND_URL.split(","):
    origin = origin.strip()
    if origin and origin not in _origins:
        _origins.append(origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(inventory.router, prefix="/api/v1/inventory", tags=["Inventory"])
app.include_router(logs.router, prefix="/api/v1/logs", tags=["Logs"])
app.include_router(catalog.router, prefix="/api/v1/catalog", tags=["Catalog"])
app.include_router(resources.router, prefix="/api/v1/resources", tags=["Resources"])
app.include_router(chat.router, prefix="/api/v1/chat", tags=["Chat"])


@app.exception_handler(FoodtrackError)
async def handle_foodtrack_error(request: Request, exc: FoodtrackError):
    status = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
        500,
    )
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status, content=exc.to_dict())


@app.get("/")
def root():
    return {"status": "running"}


@app.get("/health")
def health():
    return {"status": "ok"}
