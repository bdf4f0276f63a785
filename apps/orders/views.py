from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.projects.mixins import ProjectScopedMixin
from .models import OrderStatus
from .serializers import (
    OrderSerializer,
    CreateOrderSerializer,
    OrderStatusSerializer,
    AttachInvoiceSerializer,
    OrderFilterSerializer,
)
from . import services
from .exceptions import (
    EmptyOrderError,
    OrderNotFoundError,
    InvalidStatusTransitionError,
    ApprovalPermissionError,
)


class OrderViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Material orders of one project.

    list: Orders (?status=)
    create: Raise an order
    retrieve: Get an order
    approve: Approve a pending order (manager only)
    set_status: Move the order through its workflow
    attach_invoice: Record the supplier invoice location

    OrderNotFoundError, InvalidStatusTransitionError and
    ApprovalPermissionError keep their status code and are rendered as
    {"error": ...} like every other failure of this API.
    """

    workflow_errors = (
        OrderNotFoundError,
        InvalidStatusTransitionError,
        ApprovalPermissionError,
    )

    def handle_exception(self, exc):
        if isinstance(exc, self.workflow_errors):
            return Response({'error': str(exc.detail)}, status=exc.status_code)
        return super().handle_exception(exc)

    @extend_schema(
        parameters=[OpenApiParameter('status', str, enum=OrderStatus.values)],
        responses={200: OrderSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = OrderFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        orders = services.get_project_orders(
            project_id=self.get_project().id,
            status=filters.validated_data.get('status'),
        )
        return Response(OrderSerializer(orders, many=True).data)

    @extend_schema(request=CreateOrderSerializer, responses={201: OrderSerializer})
    def create(self, request, project_id=None):
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.create_order(
                project_id=self.get_project().id,
                requested_by=request.user,
                items=serializer.validated_data['items'],
            )
        except EmptyOrderError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        order = services.get_order(project_id=order.project_id, order_id=order.id)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OrderSerializer})
    def retrieve(self, request, project_id=None, pk=None):
        order = services.get_order(project_id=self.get_project().id, order_id=pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, project_id=None, pk=None):
        """Approve a pending order."""
        services.approve_order(
            project_id=self.get_project().id,
            order_id=pk,
            user=request.user,
        )
        order = services.get_order(project_id=self.get_project().id, order_id=pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderStatusSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='status', url_name='status')
    def set_status(self, request, project_id=None, pk=None):
        """Move the order to another status."""
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services.update_order_status(
            project_id=self.get_project().id,
            order_id=pk,
            user=request.user,
            status=serializer.validated_data['status'],
        )
        order = services.get_order(project_id=self.get_project().id, order_id=pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(request=AttachInvoiceSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'], url_path='invoice', url_name='invoice')
    def attach_invoice(self, request, project_id=None, pk=None):
        """Attach the supplier invoice."""
        serializer = AttachInvoiceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = services.attach_order_invoice(
            project_id=self.get_project().id,
            order_id=pk,
            invoice_url=serializer.validated_data['invoice_url'],
        )
        return Response(OrderSerializer(order).data)
