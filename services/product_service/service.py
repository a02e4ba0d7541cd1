from decimal import Decimal
from typing import Optional, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFound
from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate

logger = structlog.get_logger(__name__)

SEED_CATALOG = (
    {"name": "Laptop", "description": "High-performance laptop", "price": Decimal("1299.99"), "stock": 50},
    {"name": "Smartphone", "description": "Latest smartphone model", "price": Decimal("899.99"), "stock": 100},
    {"name": "Headphones", "description": "Noise-cancelling headphones", "price": Decimal("299.99"), "stock": 75},
    {"name": "Smartwatch", "description": "Fitness tracking smartwatch", "price": Decimal("399.99"), "stock": 60},
    {"name": "Tablet", "description": "10-inch tablet", "price": Decimal("599.99"), "stock": 40},
    {"name": "Camera", "description": "Digital camera 24MP", "price": Decimal("799.99"), "stock": 30},
)


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            stock=data.stock
        )
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id, stock=product.stock)
        return product

    @staticmethod
    async def list_products(db: AsyncSession):
        return await ProductRepository.get_all_products(db)

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    @staticmethod
    async def adjust_stock(db: AsyncSession, product_id: int, quantity: int):
        # No floor check: stock is allowed to go negative
        product = await ProductRepository.decrement_stock(db, product_id, quantity)
        if not product:
            raise NotFound("Product not found")
        logger.info("stock_adjusted", product_id=product_id, quantity=quantity, stock=product.stock)
        if product.stock < 0:
            logger.warning("stock_negative", product_id=product_id, stock=product.stock)
        return product

    @staticmethod
    async def seed_catalog(db: AsyncSession, catalog: Optional[Sequence[dict]] = None) -> int:
        """Insert the fixed catalog if the products table is empty. Returns rows inserted."""
        catalog = SEED_CATALOG if catalog is None else catalog
        if await ProductRepository.count_products(db) > 0:
            return 0
        await ProductRepository.bulk_create(db, [Product(**entry) for entry in catalog])
        logger.info("catalog_seeded", products=len(catalog))
        return len(catalog)
