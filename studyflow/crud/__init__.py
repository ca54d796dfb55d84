from studyflow.crud.users import get_user, upsert_user, list_users_with_roles
from studyflow.crud.profiles import (
    get_profile,
    get_or_create_profile,
    upsert_profile,
)
from studyflow.crud.tasks import list_tasks, get_task, create_task, update_task, delete_task
from studyflow.crud.pomodoro import list_sessions, create_session
from studyflow.crud.recommendations import (
    list_recommendations,
    get_recommendation,
    create_recommendation,
    dismiss_recommendation,
)
from studyflow.crud.files import list_files, get_file, create_file, delete_file
from studyflow.crud.notifications import (
    list_notifications,
    get_notification,
    create_notification,
    mark_notification_read,
    mark_all_notifications_read,
)
from studyflow.crud.stats import platform_totals, user_activity

__all__ = [
    "get_user",
    "upsert_user",
    "list_users_with_roles",
    "get_profile",
    "get_or_create_profile",
    "upsert_profile",
    "list_tasks",
    "get_task",
    "create_task",
    "update_task",
    "delete_task",
    "list_sessions",
    "create_session",
    "list_recommendations",
    "get_recommendation",
    "create_recommendation",
    "dismiss_recommendation",
    "list_files",
    "get_file",
    "create_file",
    "delete_file",
    "list_notifications",
    "get_notification",
    "create_notification",
    "mark_notification_read",
    "mark_all_notifications_read",
    "platform_totals",
    "user_activity",
]
