"""Pydantic models for data validation and type checking."""

from models.chat import ChatUser
from models.notification import (
    DeliveryFailure,
    NotificationSummary,
    WorkflowStateFound,
    WorkflowStateLookup,
    WorkflowStateNotFound,
)
from models.tracking import Project, Story, TrackingUser, Workflow, WorkflowState

__all__ = [
    "ChatUser",
    "TrackingUser",
    "Project",
    "Workflow",
    "WorkflowState",
    "Story",
    "WorkflowStateFound",
    "WorkflowStateNotFound",
    "WorkflowStateLookup",
    "DeliveryFailure",
    "NotificationSummary",
]
