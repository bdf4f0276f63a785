"""Services for financials business logic."""

from .exceptions import (
    FinancialsServiceError,
    ExpenseNotFoundError,
    InvoiceNotFoundError,
    InvalidExpenseError,
    InvalidInvoiceError,
)
from .expenses import (
    get_project_expenses,
    get_expense,
    create_expense,
    update_expense,
    delete_expense,
)
from .invoices import (
    next_invoice_number,
    get_project_invoices,
    get_client_invoice,
    create_client_invoice,
    update_client_invoice,
    delete_client_invoice,
)
from .summary import get_financial_summary

__all__ = [
    # Exceptions
    'FinancialsServiceError',
    'ExpenseNotFoundError',
    'InvoiceNotFoundError',
    'InvalidExpenseError',
    'InvalidInvoiceError',
    # Expenses
    'get_project_expenses',
    'get_expense',
    'create_expense',
    'update_expense',
    'delete_expense',
    # Invoices
    'next_invoice_number',
    'get_project_invoices',
    'get_client_invoice',
    'create_client_invoice',
    'update_client_invoice',
    'delete_client_invoice',
    # Summary
    'get_financial_summary',
]
