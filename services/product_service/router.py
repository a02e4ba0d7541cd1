from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from .schemas import ProductCreate, ProductResponse, StockUpdate
from .service import ProductService

router = APIRouter(prefix="/products", tags=["products"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)

@public_router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "products"}


@router.get("", response_model=list[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_products(db)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.create_product(db, product)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.get_product_by_id(db, product_id)


# Called by the order service once per line item after an order commits
@router.patch("/{product_id}/stock", response_model=ProductResponse)
async def adjust_stock(
    product_id: int,
    stock_update: StockUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.adjust_stock(db, product_id, stock_update.quantity)
