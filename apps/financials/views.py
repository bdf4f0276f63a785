from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.projects.mixins import ProjectScopedMixin
from .models import ExpenseCategory, InvoiceStatus
from .serializers import (
    ExpenseSerializer,
    ExpenseWriteSerializer,
    ExpenseFilterSerializer,
    ClientInvoiceSerializer,
    ClientInvoiceCreateSerializer,
    ClientInvoiceUpdateSerializer,
    InvoiceFilterSerializer,
    FinancialSummarySerializer,
)
from . import services
from .services import (
    ExpenseNotFoundError,
    InvoiceNotFoundError,
    InvalidExpenseError,
    InvalidInvoiceError,
)


class ExpenseViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Expenses of one project. Every change recomputes the project's actual cost.

    list: Expenses (?category=, ?start_date=, ?end_date=)
    create: Log an expense
    retrieve: Get an expense
    partial_update: Edit an expense
    destroy: Delete an expense (manager only)
    """

    @extend_schema(
        parameters=[
            OpenApiParameter('category', str, enum=ExpenseCategory.values),
            OpenApiParameter('start_date', str, description='YYYY-MM-DD'),
            OpenApiParameter('end_date', str, description='YYYY-MM-DD'),
        ],
        responses={200: ExpenseSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = ExpenseFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        expenses = services.get_project_expenses(
            project_id=self.get_project().id,
            **filters.validated_data
        )
        return Response(ExpenseSerializer(expenses, many=True).data)

    @extend_schema(request=ExpenseWriteSerializer, responses={201: ExpenseSerializer})
    def create(self, request, project_id=None):
        serializer = ExpenseWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = services.create_expense(
                project_id=self.get_project().id,
                submitted_by=request.user,
                **serializer.validated_data
            )
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ExpenseSerializer})
    def retrieve(self, request, project_id=None, pk=None):
        try:
            expense = services.get_expense(project_id=self.get_project().id, expense_id=pk)
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ExpenseSerializer(expense).data)

    @extend_schema(request=ExpenseWriteSerializer, responses={200: ExpenseSerializer})
    def partial_update(self, request, project_id=None, pk=None):
        serializer = ExpenseWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            expense = services.update_expense(
                project_id=self.get_project().id,
                expense_id=pk,
                **serializer.validated_data
            )
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, project_id=None, pk=None):
        try:
            services.delete_expense(
                project_id=self.get_project().id,
                expense_id=pk,
                user=request.user
            )
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ClientInvoiceViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Client invoices of one project. Paid invoices count as revenue.

    list: Invoices (?status=)
    create: Issue a Draft invoice with a generated number
    retrieve: Get an invoice with its line items
    partial_update: Edit an invoice; line_items replace the existing ones
    destroy: Delete an invoice (manager only)
    """

    @extend_schema(
        parameters=[OpenApiParameter('status', str, enum=InvoiceStatus.values)],
        responses={200: ClientInvoiceSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = InvoiceFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        invoices = services.get_project_invoices(
            project_id=self.get_project().id,
            status=filters.validated_data.get('status'),
        )
        return Response(ClientInvoiceSerializer(invoices, many=True).data)

    @extend_schema(request=ClientInvoiceCreateSerializer, responses={201: ClientInvoiceSerializer})
    def create(self, request, project_id=None):
        serializer = ClientInvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invoice = services.create_client_invoice(
                project_id=self.get_project().id,
                created_by=request.user,
                **serializer.validated_data
            )
        except InvalidInvoiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        invoice = services.get_client_invoice(project_id=invoice.project_id, invoice_id=invoice.id)
        return Response(ClientInvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ClientInvoiceSerializer})
    def retrieve(self, request, project_id=None, pk=None):
        try:
            invoice = services.get_client_invoice(project_id=self.get_project().id, invoice_id=pk)
        except InvoiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ClientInvoiceSerializer(invoice).data)

    @extend_schema(request=ClientInvoiceUpdateSerializer, responses={200: ClientInvoiceSerializer})
    def partial_update(self, request, project_id=None, pk=None):
        serializer = ClientInvoiceUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        project = self.get_project()
        try:
            services.update_client_invoice(
                project_id=project.id,
                invoice_id=pk,
                **serializer.validated_data
            )
        except InvoiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidInvoiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        invoice = services.get_client_invoice(project_id=project.id, invoice_id=pk)
        return Response(ClientInvoiceSerializer(invoice).data)

    def destroy(self, request, project_id=None, pk=None):
        try:
            services.delete_client_invoice(
                project_id=self.get_project().id,
                invoice_id=pk,
                user=request.user
            )
        except InvoiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FinancialSummaryView(ProjectScopedMixin, APIView):
    """Budget, cost, revenue and receivables of one project."""

    @extend_schema(responses={200: FinancialSummarySerializer})
    def get(self, request, project_id=None):
        summary = services.get_financial_summary(project_id=self.get_project().id)
        return Response(FinancialSummarySerializer(summary).data)
