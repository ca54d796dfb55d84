from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from studyflow.utils.dates import parse_due_date

Role = Literal["student", "admin"]
Priority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed"]
RecommendationType = Literal["study_tip", "focus", "review", "schedule"]
NotificationType = Literal["info", "warning", "deadline", "achievement"]


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------- users & profiles ----------

class UserOut(CamelModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime


class AdminUserOut(UserOut):
    role: Role = "student"


class ProfileOut(CamelModel):
    id: int
    user_id: str
    role: Role
    study_goal: Optional[str] = None
    preferred_subjects: Optional[str] = None
    daily_study_target: Optional[int] = None


class ProfileUpdate(CamelModel):
    study_goal: Optional[str] = Field(default=None, max_length=2000)
    preferred_subjects: Optional[str] = Field(default=None, max_length=1000)
    daily_study_target: Optional[int] = Field(default=None, ge=1, le=1440)


class RoleUpdate(CamelModel):
    role: Role


# ---------- tasks ----------

class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=5000)
    subject: Optional[str] = Field(default=None, max_length=200)
    priority: Priority = "medium"
    status: TaskStatus = "pending"
    due_date: Optional[datetime] = None
    estimated_minutes: Optional[int] = Field(default=None, ge=1, le=1440)

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, v):
        return parse_due_date(v)


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=5000)
    subject: Optional[str] = Field(default=None, max_length=200)
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    estimated_minutes: Optional[int] = Field(default=None, ge=1, le=1440)

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, v):
        return parse_due_date(v)

    @model_validator(mode="after")
    def _required_fields_not_null(self):
        for name in ("title", "priority", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self


class TaskOut(CamelModel):
    id: int
    user_id: str
    title: str
    description: Optional[str] = None
    subject: Optional[str] = None
    priority: Priority
    status: TaskStatus
    due_date: Optional[datetime] = None
    estimated_minutes: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: datetime


# ---------- pomodoro ----------

class PomodoroCreate(CamelModel):
    task_id: Optional[int] = None
    duration: int = Field(ge=1, le=120)
    break_duration: int = Field(ge=1, le=60)
    completed: bool


class PomodoroSessionOut(CamelModel):
    id: int
    user_id: str
    task_id: Optional[int] = None
    duration: int
    break_duration: int
    completed: bool
    started_at: datetime
    ended_at: Optional[datetime] = None


# ---------- recommendations ----------

class RecommendationOut(CamelModel):
    id: int
    user_id: str
    title: str
    description: str
    subject: Optional[str] = None
    type: RecommendationType
    priority: Priority
    dismissed: bool
    created_at: datetime


# ---------- files ----------

class FileUploadOut(CamelModel):
    id: int
    user_id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    task_id: Optional[int] = None
    created_at: datetime


# ---------- notifications ----------

class NotificationOut(CamelModel):
    id: int
    user_id: str
    title: str
    message: str
    type: NotificationType
    read: bool
    created_at: datetime


class SuccessOut(BaseModel):
    success: bool = True


# ---------- admin ----------

class UserActivity(CamelModel):
    user_id: str
    email: str
    task_count: int
    session_count: int


class AdminStats(CamelModel):
    total_users: int
    total_tasks: int
    completed_tasks: int
    total_sessions: int
    total_study_minutes: int
    user_activity: List[UserActivity]
