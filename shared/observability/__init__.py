from .setup import setup_observability
from .metrics import (
    ecomm_orders_created_total,
    ecomm_order_creation_duration_seconds,
    ecomm_stock_adjustment_total
)
