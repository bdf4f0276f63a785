"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear

This creates:
- 7 users, one per site role (password: password123)
- 2 projects with teams and daily wages
- Tasks, inventory, material orders
- Expenses and client invoices
- Documents
- Attendance for the last 30 days
"""

import random
from datetime import timedelta
from decimal import Decimal

from django.core.files.base import ContentFile
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.currency import currency_token
from apps.accounts.models import Role, User
from apps.documents.models import Document, DocumentType
from apps.financials.models import (
    ClientInvoice,
    Expense,
    ExpenseCategory,
    InvoiceLineItem,
    InvoiceStatus,
)
from apps.inventory.models import InventoryItem
from apps.labor.models import AttendanceRecord, AttendanceStatus
from apps.orders.models import Order, OrderItem, OrderStatus
from apps.projects.models import ActivityAction, ActivityLog, Project, ProjectTeamMember
from apps.tasks.models import Task, TaskStatus

SAMPLE_PASSWORD = 'password123'

USERS = [
    ('manager@banaisuite.com', 'Sanjay Sharma', Role.PROJECT_MANAGER),
    ('engineer@banaisuite.com', 'Rina Dahal', Role.SITE_ENGINEER),
    ('accountant@banaisuite.com', 'Anil Mehta', Role.ACCOUNTANT),
    ('storekeeper@banaisuite.com', 'Bikash Rai', Role.STORE_KEEPER),
    ('client@banaisuite.com', 'Sunita Joshi', Role.CLIENT),
    ('hari@banaisuite.com', 'Hari Bahadur', Role.SITE_ENGINEER),
    ('gita@banaisuite.com', 'Gita Thapa', Role.SITE_ENGINEER),
]

PROJECT_ROLES = ['Foreman', 'Carpenter', 'Mason', 'Electrician', 'Plumber', 'Operator']

TASK_TITLES = [
    'Site clearing and survey',
    'Foundation excavation',
    'Footing reinforcement',
    'Basement slab casting',
    'Column shuttering',
    'Ground floor brickwork',
    'Electrical conduit layout',
    'Plumbing rough-in',
    'Roof slab waterproofing',
    'Plastering, first coat',
]

LINE_ITEM_DESCRIPTIONS = [
    'Earthwork in excavation',
    'PCC 1:3:6 in foundation',
    'RCC M20 in columns',
    'Reinforcement steel bending',
    'Brick masonry 1:4',
    'Cement plaster 12mm',
    'Formwork for slabs',
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=42,
            help='Random seed for generated values',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        random.seed(options['seed'])

        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()

        tower = self.create_project(
            users,
            name='Everest Heights Residency',
            location='Baneshwor, Kathmandu',
            client='Himalayan Housing Pvt. Ltd.',
            budget=Decimal('50000000.00'),
            days_ago=120,
            progress=35,
            team=['engineer', 'accountant', 'storekeeper', 'hari', 'gita', 'client'],
        )
        bridge = self.create_project(
            users,
            name='Seti River Bridge',
            location='Pokhara, Kaski',
            client='Department of Roads',
            budget=Decimal('18500000.00'),
            days_ago=60,
            progress=10,
            team=['engineer', 'storekeeper', 'hari'],
        )

        for project in (tower, bridge):
            self.create_tasks(project)
            self.create_attendance(project)

        self.create_inventory(tower)
        self.create_orders(tower, users)
        self.create_expenses(tower, users)
        self.create_invoices(tower)
        self.create_documents(tower, users)
        self.create_activity(tower, users)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        for email, name, role in USERS:
            self.stdout.write(f'  {email} / {SAMPLE_PASSWORD} ({role.label})')

    def clear_data(self):
        """Clear all sample data. Projects cascade to their records."""
        Project.objects.all().delete()
        User.objects.filter(email__in=[email for email, _, _ in USERS]).delete()

    def create_users(self):
        """Create one user per site role."""
        self.stdout.write('  Creating users...')

        users = {}
        for email, name, role in USERS:
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={
                    'display_name': name,
                    'role': role,
                    'email_verified': True,
                }
            )
            user.set_password(SAMPLE_PASSWORD)
            user.save()
            users[email.split('@')[0]] = user

        return users

    def create_project(self, users, *, name, location, client, budget, days_ago, progress, team):
        """Create a project managed by the sample project manager."""
        self.stdout.write(f'  Creating project {name}...')

        manager = users['manager']
        project, created = Project.objects.get_or_create(
            name=name,
            defaults={
                'location': location,
                'client': client,
                'start_date': timezone.localdate() - timedelta(days=days_ago),
                'end_date': timezone.localdate() + timedelta(days=365),
                'budget': budget,
                'progress': progress,
                'created_by': manager,
            }
        )

        if created:
            ProjectTeamMember.objects.create(
                project=project,
                user=manager,
                project_role='Project Manager',
                daily_wage=Decimal('0.00'),
            )
            for key in team:
                ProjectTeamMember.objects.create(
                    project=project,
                    user=users[key],
                    project_role=random.choice(PROJECT_ROLES),
                    daily_wage=Decimal(random.randint(800, 3500)),
                )

        return project

    def create_tasks(self, project):
        self.stdout.write(f'  Creating tasks for {project.name}...')

        if project.tasks.exists():
            return

        members = [m.user for m in project.team_members.select_related('user')]
        today = timezone.localdate()
        previous = None
        for title in TASK_TITLES:
            task = Task.objects.create(
                project=project,
                title=title,
                description=f'{title} as per approved drawings.',
                assignee=random.choice(members),
                status=random.choice(TaskStatus.values),
                start_date=today - timedelta(days=random.randint(0, 30)),
                due_date=today + timedelta(days=random.randint(1, 60)),
            )
            if previous is not None and random.random() < 0.5:
                task.dependencies.add(previous)
            previous = task

    def create_inventory(self, project):
        self.stdout.write('  Creating inventory...')

        items = [
            ('Cement (OPC)', Decimal('500'), 'bags', Decimal('100')),
            ('Steel Rebar (12mm)', Decimal('2500'), 'kg', Decimal('500')),
            ('Sand', Decimal('120'), 'cubic meters', Decimal('5')),
            ('Diesel', Decimal('800'), 'liters', Decimal('200')),
            ('PVC pipe', Decimal('0'), 'kg', Decimal('200')),
        ]
        for name, quantity, unit, threshold in items:
            InventoryItem.objects.get_or_create(
                project=project,
                name=name,
                defaults={'quantity': quantity, 'unit': unit, 'threshold': threshold}
            )

    def create_orders(self, project, users):
        self.stdout.write('  Creating orders...')

        if project.orders.exists():
            return

        now = timezone.now()
        orders = [
            ('Cement (OPC)', 200, 'bags', OrderStatus.RECEIVED, 'engineer', True, 10),
            ('Diesel', 500, 'liters', OrderStatus.SENT, 'storekeeper', True, 5),
            ('Steel Rebar (12mm)', 1000, 'kg', OrderStatus.PENDING, 'engineer', False, 1),
            ('Sand', 50, 'cubic meters', OrderStatus.APPROVED, 'engineer', True, 3),
        ]
        for name, quantity, unit, status, requester, approved, days_ago in orders:
            order = Order.objects.create(
                project=project,
                status=status,
                requested_by=users[requester],
                approved_by=users['manager'] if approved else None,
            )
            # created_at is auto_now_add, so backdate it afterwards
            Order.objects.filter(pk=order.pk).update(created_at=now - timedelta(days=days_ago))
            if status == OrderStatus.RECEIVED:
                order.received_at = now - timedelta(days=2)
                order.invoice_url = '/invoices/sample-invoice.pdf'
                order.save(update_fields=['received_at', 'invoice_url'])

            OrderItem.objects.create(order=order, name=name, quantity=Decimal(quantity), unit=unit)

    def create_expenses(self, project, users):
        self.stdout.write('  Creating expenses...')

        if project.expenses.exists():
            return

        today = timezone.localdate()
        expenses = [
            ('Labor payment for week 4', '150000.00', ExpenseCategory.LABOR, 'accountant', 7, '/receipts/sample.pdf'),
            ('Purchase of safety helmets', '8000.00', ExpenseCategory.MATERIAL, 'engineer', 15, ''),
            ('Fuel for excavator', '12000.00', ExpenseCategory.FUEL, 'storekeeper', 3, ''),
        ]
        for description, amount, category, submitter, days_ago, receipt_url in expenses:
            Expense.objects.create(
                project=project,
                description=description,
                amount=Decimal(amount),
                category=category,
                date=today - timedelta(days=days_ago),
                submitted_by=users[submitter],
                receipt_url=receipt_url,
            )

        project.recalculate_actual_cost()

    def create_invoices(self, project):
        self.stdout.write('  Creating client invoices...')

        if project.client_invoices.exists():
            return

        today = timezone.localdate()
        invoices = [
            ('INV-2024-001', 'Mobilization Advance', InvoiceStatus.PAID, 2, 300, 270),
            ('INV-2024-002', 'First Running Bill', InvoiceStatus.PAID, 3, 60, 30),
            ('INV-2024-003', 'Second Running Bill', InvoiceStatus.SENT, 1, 10, -20),
        ]
        for number, title, status, line_count, issued_ago, due_ago in invoices:
            invoice = ClientInvoice.objects.create(
                project=project,
                invoice_number=number,
                title=title,
                status=status,
                issue_date=today - timedelta(days=issued_ago),
                due_date=today - timedelta(days=due_ago),
            )
            for description in random.sample(LINE_ITEM_DESCRIPTIONS, line_count):
                InvoiceLineItem.objects.create(
                    invoice=invoice,
                    description=description,
                    quantity=Decimal(random.randint(10, 100)),
                    unit_price=Decimal(random.randint(50, 500)),
                )
            invoice.recalculate_amount()

        project.recalculate_revenue()

    def create_documents(self, project, users):
        self.stdout.write('  Creating documents...')

        if project.documents.exists():
            return

        documents = [
            ('Foundation Blueprint v2.pdf', DocumentType.DRAWING, 2, 'engineer'),
            ('Electrical Permit E-101.pdf', DocumentType.PERMIT, 1, 'manager'),
            ('Site-Photo-Week-4.jpg', DocumentType.IMAGE, 1, 'engineer'),
        ]
        for name, doc_type, version, uploader in documents:
            document = Document(
                project=project,
                name=name,
                doc_type=doc_type,
                version=version,
                uploaded_by=users[uploader],
            )
            document.file.save(name, ContentFile(f'Sample file: {name}\n'.encode()), save=False)
            document.save()

    def create_attendance(self, project):
        """Random attendance for every team member over the last 30 days."""
        self.stdout.write(f'  Creating attendance for {project.name}...')

        if project.attendance_records.exists():
            return

        today = timezone.localdate()
        records = [
            AttendanceRecord(
                project=project,
                member=membership.user,
                date=today - timedelta(days=offset),
                status=random.choice(AttendanceStatus.values),
            )
            for offset in range(30)
            for membership in project.team_members.select_related('user')
        ]
        AttendanceRecord.objects.bulk_create(records)

    def create_activity(self, project, users):
        self.stdout.write('  Creating activity log...')

        if project.activity_logs.exists():
            return

        now = timezone.now()
        entries = [
            ('engineer', ActivityAction.TASK_STATUS_UPDATE, 'Updated task "Foundation excavation" to In Progress.', 1),
            ('storekeeper', ActivityAction.INVENTORY_REQUEST, 'Requested 200 bags of Cement (OPC).', 2),
            ('accountant', ActivityAction.EXPENSE_LOGGED, f'Logged an expense of {currency_token(12000)} for Fuel for excavator.', 3),
            ('manager', ActivityAction.PROJECT_UPDATED, 'Updated project budget.', 5),
        ]
        for user, action, details, days_ago in entries:
            ActivityLog.objects.create(
                project=project,
                user=users[user],
                action=action,
                details=details,
                timestamp=now - timedelta(days=days_ago),
            )
