from app.models.order import Order, OrderChanges, OrderStatus, merge_changes

__all__ = ["Order", "OrderChanges", "OrderStatus", "merge_changes"]
