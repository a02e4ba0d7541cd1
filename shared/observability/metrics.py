from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_orders_created_total = Counter(
    "ecomm_orders_created_total",
    "Total orders committed to the order store"
)

ecomm_order_creation_duration_seconds = Histogram(
    "ecomm_order_creation_duration_seconds",
    "Order creation duration in seconds, stock adjustments included"
)

ecomm_stock_adjustment_total = Counter(
    "ecomm_stock_adjustment_total",
    "Stock adjustment calls issued after an order commit",
    ["status"] # Labels: 'success', 'failed', 'timeout'
)
