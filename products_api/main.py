"""
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from products_api.config import get_settings
from products_api.database import engine, connect_db
from products_api.exceptions import (
    ProductsApiError,
    products_api_exception_handler,
    unhandled_exception_handler,
)
from products_api.middleware import OriginGuardMiddleware, RequestLoggingMiddleware
from products_api.api import products
from products_api.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Failure here is logged only; the API is served regardless
    await connect_db(engine)

    yield

    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="CRUD API over products",
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=settings.DOCS_URL,
)

# Middleware, innermost first: request logging, CORS headers, origin guard
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(OriginGuardMiddleware, allowed_origin=settings.FRONTEND_URL)

# Error handlers
app.add_exception_handler(ProductsApiError, products_api_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include routers
app.include_router(products.router, prefix="/api/products", tags=["Products"])


@app.get("/api", tags=["Health"])
async def api_root():
    return {"msg": "API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "products_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
