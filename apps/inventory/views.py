from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.projects.mixins import ProjectScopedMixin
from .serializers import (
    InventoryItemSerializer,
    InventoryItemWriteSerializer,
    InventoryFilterSerializer,
    MaterialConsumptionSerializer,
    LogConsumptionSerializer,
    ConsumptionFilterSerializer,
)
from . import services
from .exceptions import (
    InventoryItemNotFoundError,
    DuplicateInventoryItemError,
    InvalidQuantityError,
)


class InventoryItemViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Inventory of one project.

    list: Items (?low_stock=true for items at or under threshold)
    create: Add an item
    retrieve: Get an item
    partial_update: Update an item
    destroy: Remove an item (manager only)
    consume: Log material consumption (POST /consumption/)
    consumption_history: Consumption records (GET /consumption/)
    """

    @extend_schema(
        parameters=[OpenApiParameter('low_stock', bool)],
        responses={200: InventoryItemSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = InventoryFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        items = services.get_project_inventory(
            project_id=self.get_project().id,
            low_stock_only=filters.validated_data['low_stock'],
        )
        return Response(InventoryItemSerializer(items, many=True).data)

    @extend_schema(request=InventoryItemWriteSerializer, responses={201: InventoryItemSerializer})
    def create(self, request, project_id=None):
        serializer = InventoryItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = services.create_inventory_item(
                project_id=self.get_project().id,
                **serializer.validated_data
            )
        except DuplicateInventoryItemError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InventoryItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: InventoryItemSerializer})
    def retrieve(self, request, project_id=None, pk=None):
        try:
            item = services.get_inventory_item(project_id=self.get_project().id, item_id=pk)
        except InventoryItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(InventoryItemSerializer(item).data)

    @extend_schema(request=InventoryItemWriteSerializer, responses={200: InventoryItemSerializer})
    def partial_update(self, request, project_id=None, pk=None):
        serializer = InventoryItemWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            item = services.update_inventory_item(
                project_id=self.get_project().id,
                item_id=pk,
                **serializer.validated_data
            )
        except InventoryItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateInventoryItemError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InventoryItemSerializer(item).data)

    def destroy(self, request, project_id=None, pk=None):
        try:
            services.delete_inventory_item(
                project_id=self.get_project().id,
                item_id=pk,
                user=request.user
            )
        except InventoryItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        methods=['GET'],
        parameters=[
            OpenApiParameter('item', str, description='Inventory item UUID'),
            OpenApiParameter('start_date', str, description='YYYY-MM-DD'),
            OpenApiParameter('end_date', str, description='YYYY-MM-DD'),
        ],
        responses={200: MaterialConsumptionSerializer(many=True)},
    )
    @extend_schema(
        methods=['POST'],
        request=LogConsumptionSerializer,
        responses={201: MaterialConsumptionSerializer},
    )
    @action(detail=False, methods=['get', 'post'])
    def consumption(self, request, project_id=None):
        """Consumption history, or log a new usage."""
        project = self.get_project()

        if request.method == 'GET':
            filters = ConsumptionFilterSerializer(data=request.query_params)
            filters.is_valid(raise_exception=True)
            history = services.get_consumption_history(
                project_id=project.id,
                item_id=filters.validated_data.get('item'),
                start_date=filters.validated_data.get('start_date'),
                end_date=filters.validated_data.get('end_date'),
            )
            return Response(MaterialConsumptionSerializer(history, many=True).data)

        serializer = LogConsumptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            consumption = services.log_material_consumption(
                project_id=project.id,
                logged_by=request.user,
                **serializer.validated_data
            )
        except InventoryItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidQuantityError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            MaterialConsumptionSerializer(consumption).data,
            status=status.HTTP_201_CREATED
        )
