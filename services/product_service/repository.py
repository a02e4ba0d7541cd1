from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select, update
from .models import Product

class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_all_products(db: AsyncSession):
        result = await db.execute(select(Product).order_by(Product.id))
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def decrement_stock(db: AsyncSession, product_id: int, quantity: int):
        """Subtract in a single statement so concurrent decrements never lose updates.

        Returns None when no product matched.
        """
        result = await db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock - quantity)
            .returning(Product)
        )
        product = result.scalars().first()
        await db.commit()
        return product

    @staticmethod
    async def count_products(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Product))
        return result.scalar_one()

    @staticmethod
    async def bulk_create(db: AsyncSession, products: list[Product]):
        db.add_all(products)
        await db.commit()
        return products
