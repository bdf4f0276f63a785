"""
Domain exceptions for orders app.

Workflow errors are APIExceptions carrying their HTTP status code;
OrderViewSet renders them as {"error": ...}.
"""
from rest_framework.exceptions import APIException


class OrderServiceError(Exception):
    """Base exception for order service errors."""
    pass


class EmptyOrderError(OrderServiceError):
    """Raised when no item of an order has a positive quantity."""
    pass


class OrderNotFoundError(APIException):
    """Order not found in the project."""
    status_code = 404
    default_detail = 'Order not found.'
    default_code = 'order_not_found'


class InvalidStatusTransitionError(APIException):
    """Requested status is not reachable from the current one."""
    status_code = 400
    default_detail = 'Invalid status transition for this order.'
    default_code = 'invalid_status_transition'


class ApprovalPermissionError(APIException):
    """Only project managers approve or reject orders."""
    status_code = 403
    default_detail = 'Only the project manager can approve or reject orders.'
    default_code = 'approval_permission_denied'
