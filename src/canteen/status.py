"""
Order status lifecycle.

An order starts as ``received``, may be ``picked`` and ends as ``prepared``.
Once prepared it can only be deleted.
"""
from typing import Dict, FrozenSet

from canteen.exceptions import InvalidStatusTransitionError, OrderValidationError
from canteen.models.order import OrderStatusEnum

ALLOWED_TRANSITIONS: Dict[OrderStatusEnum, FrozenSet[OrderStatusEnum]] = {
    OrderStatusEnum.received: frozenset({OrderStatusEnum.picked, OrderStatusEnum.prepared}),
    OrderStatusEnum.picked: frozenset({OrderStatusEnum.prepared}),
    OrderStatusEnum.prepared: frozenset(),
}

VALID_STATUSES = tuple(s.value for s in OrderStatusEnum)


def parse_status(value) -> OrderStatusEnum:
    """Convert a client-supplied status string to ``OrderStatusEnum``."""
    if isinstance(value, OrderStatusEnum):
        return value
    try:
        return OrderStatusEnum(value)
    except ValueError:
        raise OrderValidationError(
            f"Invalid status: {value!r}. Expected one of: {', '.join(VALID_STATUSES)}"
        ) from None


def can_transition(current: OrderStatusEnum, target: OrderStatusEnum) -> bool:
    # rewriting the current status is a no-op
    return current == target or target in ALLOWED_TRANSITIONS[current]


def validate_transition(current: OrderStatusEnum, target: OrderStatusEnum) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)
