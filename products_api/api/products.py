"""
Products API endpoints
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel

from products_api.exceptions import ProductNotFoundError
from products_api.models.product import Product
from products_api.services.product_store import ProductStore, get_product_store
from products_api.utils.logger import get_logger
from products_api.utils.validators import body, is_positive, param, to_boolean, to_number, validate

router = APIRouter()
logger = get_logger(__name__)


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    availability: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    name: str
    price: float


class ProductUpdate(BaseModel):
    name: str
    price: float
    availability: bool


class ProductData(BaseModel):
    data: ProductResponse


class ProductListData(BaseModel):
    data: List[ProductResponse]


class MessageData(BaseModel):
    data: str


class ErrorResponse(BaseModel):
    error: str


class ValidationErrorItem(BaseModel):
    type: str
    msg: str
    path: str
    location: str
    value: Optional[Any] = None


class ValidationErrorResponse(BaseModel):
    errors: List[ValidationErrorItem]


def _json_body(model) -> Dict[str, Any]:
    """OpenAPI request body entry; the body itself is checked by the rule chains"""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}
INVALID = {400: {"model": ValidationErrorResponse, "description": "Validation errors"}}

# Validation rules
id_rules = [
    param("id").is_int("Invalid ID"),
]

create_rules = [
    body("name").not_empty("The product name can't be empty"),
    body("price")
        .is_numeric("Invalid value")
        .not_empty("The product price can't be empty")
        .custom(is_positive, "The product price can't be negative"),
]

update_rules = [
    *id_rules,
    body("name").not_empty("The product name can't be empty"),
    body("price")
        .is_numeric("Invalid value")
        .not_empty("The product price can't be empty")
        .custom(is_positive, "The product price can't be negative or 0"),
    body("availability").is_boolean("Invalid availability value"),
]


def _serialize(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product)


# Ids outside a signed 64-bit integer can never have been stored
MAX_ID = 2 ** 63 - 1


async def _get_or_404(store: ProductStore, product_id: str) -> Product:
    digits = product_id.lstrip("+-")
    if len(digits) > len(str(MAX_ID)) or not -MAX_ID - 1 <= int(product_id) <= MAX_ID:
        raise ProductNotFoundError(product_id)

    product = await store.find_by_pk(int(product_id))
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


@router.get("", response_model=ProductListData)
async def get_products(store: ProductStore = Depends(get_product_store)):
    """List all products ordered by ID"""
    products = await store.find_all()
    return {"data": [_serialize(p) for p in products]}


@router.get(
    "/{id}",
    response_model=ProductData,
    responses={**INVALID, **NOT_FOUND},
    dependencies=[Depends(validate(*id_rules))],
)
async def get_product_by_id(
    product_id: str = Path(alias="id", description="Product ID"),
    store: ProductStore = Depends(get_product_store),
):
    """Get a single product"""
    product = await _get_or_404(store, product_id)
    return {"data": _serialize(product)}


@router.post(
    "",
    status_code=201,
    response_model=ProductData,
    responses=INVALID,
    openapi_extra=_json_body(ProductCreate),
)
async def create_product(
    payload: Dict[str, Any] = Depends(validate(*create_rules)),
    store: ProductStore = Depends(get_product_store),
):
    """Create a new product; availability starts out true"""
    product = await store.create({
        "name": str(payload["name"]),
        "price": to_number(payload["price"]),
        "availability": True,
    })
    logger.info(f"Created product {product.id} ({product.name})")
    return {"data": _serialize(product)}


@router.put(
    "/{id}",
    response_model=ProductData,
    responses={**INVALID, **NOT_FOUND},
    openapi_extra=_json_body(ProductUpdate),
)
async def update_product(
    product_id: str = Path(alias="id", description="Product ID"),
    payload: Dict[str, Any] = Depends(validate(*update_rules)),
    store: ProductStore = Depends(get_product_store),
):
    """Replace name, price and availability of a product"""
    product = await _get_or_404(store, product_id)

    product.name = str(payload["name"])
    product.price = to_number(payload["price"])
    product.availability = to_boolean(payload["availability"])

    product = await store.save(product)
    logger.info(f"Updated product {product.id}")
    return {"data": _serialize(product)}


@router.patch(
    "/{id}",
    response_model=ProductData,
    responses={**INVALID, **NOT_FOUND},
    dependencies=[Depends(validate(*id_rules))],
)
async def update_availability(
    product_id: str = Path(alias="id", description="Product ID"),
    store: ProductStore = Depends(get_product_store),
):
    """Toggle the availability of a product"""
    product = await _get_or_404(store, product_id)

    product.availability = not product.availability

    product = await store.save(product)
    logger.info(f"Product {product.id} availability set to {product.availability}")
    return {"data": _serialize(product)}


@router.delete(
    "/{id}",
    response_model=MessageData,
    responses={**INVALID, **NOT_FOUND},
    dependencies=[Depends(validate(*id_rules))],
)
async def delete_product(
    product_id: str = Path(alias="id", description="Product ID"),
    store: ProductStore = Depends(get_product_store),
):
    """Delete a product"""
    product = await _get_or_404(store, product_id)

    await store.destroy(product)
    logger.info(f"Deleted product {product_id}")
    return {"data": "Product deleted."}
