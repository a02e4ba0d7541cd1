from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from .schemas import OrderCreate, OrderDetailResponse, OrderResponse, StatusUpdate
from .service import OrderCoordinator

router = APIRouter(prefix="/orders", tags=["orders"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


def get_coordinator(request: Request) -> OrderCoordinator:
    return request.app.state.coordinator


@public_router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "orders"}

@router.get("", response_model=list[OrderResponse])
async def list_orders(db: AsyncSession = Depends(get_db)):
    return await OrderCoordinator.list_orders(db)

# Responds 201 once the order is committed, whatever happened to the stock adjustments
@router.post("", response_model=OrderDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    db: AsyncSession = Depends(get_db),
    coordinator: OrderCoordinator = Depends(get_coordinator),
):
    return await coordinator.create_order(db, order.items)

@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    return await OrderCoordinator.get_order(db, order_id)

@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_status(order_id: int, payload: StatusUpdate, db: AsyncSession = Depends(get_db)):
    return await OrderCoordinator.update_status(db, order_id, payload.status)
