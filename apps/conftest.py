"""Fixtures shared by the project-scoped apps."""

import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Role, User
from apps.projects.models import ProjectTeamMember
from apps.projects.services import create_project


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def pm(db):
    """Project manager who owns the test project."""
    return User.objects.create_user(
        email='pm@banaisuite.com',
        password='TestPass123!',
        display_name='Sanjay Sharma',
        role=Role.PROJECT_MANAGER,
        email_verified=True,
    )


@pytest.fixture
def engineer(db):
    """Site engineer on the test project team."""
    return User.objects.create_user(
        email='engineer@banaisuite.com',
        password='TestPass123!',
        display_name='Rina Dahal',
        role=Role.SITE_ENGINEER,
        email_verified=True,
    )


@pytest.fixture
def outsider(db):
    """User who is on no project team."""
    return User.objects.create_user(
        email='outsider@banaisuite.com',
        password='TestPass123!',
        display_name='Bikash Rai',
        role=Role.STORE_KEEPER,
        email_verified=True,
    )


@pytest.fixture
def super_admin(db):
    return User.objects.create_user(
        email='admin@banaisuite.com',
        password='TestPass123!',
        display_name='Admin',
        role=Role.SUPER_ADMIN,
        email_verified=True,
    )


# =============================================================================
# Projects
# =============================================================================

@pytest.fixture
def project(pm, engineer):
    """Active project managed by pm, with engineer on the team."""
    project = create_project(
        name='Kathmandu Tower',
        location='Kathmandu',
        client='Himalayan Builders',
        start_date=date(2025, 1, 1),
        budget=Decimal('1000000.00'),
        created_by=pm,
    )
    ProjectTeamMember.objects.create(
        project=project,
        user=engineer,
        project_role='Site Engineer',
        daily_wage=Decimal('1000.00'),
    )
    return project


@pytest.fixture
def other_project(db, super_admin):
    """Project the test users are not on."""
    return create_project(
        name='Pokhara Bridge',
        location='Pokhara',
        client='Gandaki Province',
        start_date=date(2025, 2, 1),
        budget=Decimal('500000.00'),
        created_by=super_admin,
    )


# =============================================================================
# Clients
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def pm_client(pm):
    return _client_for(pm)


@pytest.fixture
def engineer_client(engineer):
    return _client_for(engineer)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def admin_client_jwt(super_admin):
    return _client_for(super_admin)
