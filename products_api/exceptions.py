"""
Exception types and the handlers that turn them into JSON responses
"""
from typing import Any, Dict, List

from fastapi import Request
from fastapi.responses import JSONResponse

from products_api.utils.logger import get_logger

logger = get_logger(__name__)


class ProductsApiError(Exception):
    """Base error carrying the HTTP status it should be reported with"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ProductNotFoundError(ProductsApiError):
    def __init__(self, product_id: Any = None):
        super().__init__("Product not found.", status_code=404)
        self.product_id = product_id


class MalformedBodyError(ProductsApiError):
    def __init__(self):
        super().__init__("Malformed JSON body.", status_code=400)


class CorsOriginError(ProductsApiError):
    def __init__(self, origin: str):
        super().__init__("Not allowed by CORS", status_code=403)
        self.origin = origin


class RequestValidationFailed(ProductsApiError):
    """Raised when one or more validation rules rejected the request"""

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(f"{len(errors)} validation error(s)", status_code=400)
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}


async def products_api_exception_handler(request: Request, exc: ProductsApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    elif isinstance(exc, ProductNotFoundError):
        logger.info(f"{request.method} {request.url.path}: product {exc.product_id} not found")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error."})
