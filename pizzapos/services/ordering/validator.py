"""Order validation service."""
from typing import List
from pizzapos.services.ordering.models import OrderDetails, OrderType, SubmitOrderRequest


class OrderValidator:
    """Service for validating orders before they are priced and stored."""

    def validate_details(self, details: OrderDetails) -> List[str]:
        """
        Check customer and fulfilment details.

        Returns:
            List of human-readable problems, empty when the details are usable
        """
        errors = []
        if not details.customer_name.strip():
            errors.append("Customer name is required")
        if details.order_type == OrderType.DELIVERY:
            if not (details.delivery_address or "").strip():
                errors.append("Delivery address is required for delivery orders")
        return errors

    def validate(self, request: SubmitOrderRequest) -> List[str]:
        """Check a full submission."""
        errors = []
        if not request.lines:
            errors.append("Cart is empty")
        if not request.staff_id.strip():
            errors.append("Staff id is required")
        errors.extend(self.validate_details(request.details))
        return errors
