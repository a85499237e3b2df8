import os
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .controllers import products
from .models.product import StoreError

logger = logging.getLogger(__name__)

# Routes match on exact method and path; no docs pages, no slash redirects
app = FastAPI(
    title="Product API",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)

# Configure CORS - comma-separated list, e.g. "https://shop.example.com,http://localhost:5173"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # A known path with the wrong method is still "Not Found"
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content="Not Found")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} validation error(s)")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=500, content=exc.to_dict())


# Include routers
app.include_router(products.router, tags=["products"])
