"""
Storage adapter for products
"""
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from products_api.database import get_db
from products_api.models.product import Product


class ProductStore:
    """Product reads and writes over one request-scoped session"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[Product]:
        result = await self.session.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def find_by_pk(self, product_id: int) -> Optional[Product]:
        return await self.session.get(Product, product_id)

    async def create(self, fields: Dict[str, Any]) -> Product:
        product = Product(**fields)
        if product.availability is None:
            product.availability = True
        self.session.add(product)
        await self.session.commit()
        await self.session.refresh(product)
        return product

    async def save(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.commit()
        await self.session.refresh(product)
        return product

    async def destroy(self, product: Product) -> None:
        await self.session.delete(product)
        await self.session.commit()


async def get_product_store(db: AsyncSession = Depends(get_db)) -> ProductStore:
    """Dependency for getting a product store bound to the request session"""
    return ProductStore(db)
