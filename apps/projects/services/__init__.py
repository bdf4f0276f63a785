"""Services for projects business logic."""

from .exceptions import (
    ProjectsServiceError,
    ProjectNotFoundError,
    InsufficientPermissionsError,
    InvalidProjectDataError,
    UserNotFoundError,
    AlreadyTeamMemberError,
    NotTeamMemberError,
)
from .activity_log import record_activity, get_project_activity
from .project_management import (
    get_project_by_id,
    ensure_project_manager,
    get_visible_projects,
    list_projects,
    create_project,
    update_project,
    archive_project,
    delete_project,
)
from .team_management import (
    get_team_members,
    get_team_member,
    add_team_member,
    update_team_member,
    remove_team_member,
)
from .dashboard import get_dashboard_summary

__all__ = [
    # Exceptions
    'ProjectsServiceError',
    'ProjectNotFoundError',
    'InsufficientPermissionsError',
    'InvalidProjectDataError',
    'UserNotFoundError',
    'AlreadyTeamMemberError',
    'NotTeamMemberError',
    # Activity
    'record_activity',
    'get_project_activity',
    # Projects
    'get_project_by_id',
    'ensure_project_manager',
    'get_visible_projects',
    'list_projects',
    'create_project',
    'update_project',
    'archive_project',
    'delete_project',
    # Team
    'get_team_members',
    'get_team_member',
    'add_team_member',
    'update_team_member',
    'remove_team_member',
    # Dashboard
    'get_dashboard_summary',
]
