from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class OrderStatus(str):
    """Free-form order status tag.

    Any string is a valid status and no transition rules are enforced.
    Stored as plain text, so a stricter state machine can be introduced
    here later without migrating existing rows.
    """

    __slots__ = ()

    def __new__(cls, value):
        return super().__new__(cls, str(value))

    def __repr__(self):
        return f"OrderStatus({str.__repr__(self)})"

    @property
    def is_pending(self) -> bool:
        return self == PENDING


PENDING = OrderStatus("pending")


class StatusType(TypeDecorator):
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else OrderStatus(value)
