"""Domain Enumerations - Article statuses, workflow actions, roles"""
from enum import Enum


class ArticleStatus(str, Enum):
    """Editorial workflow status of an article"""
    # Core publishing workflow
    DRAFT = "DRAFT"
    IN_PROGRESS = "IN_PROGRESS"
    READY_FOR_REVIEW = "READY_FOR_REVIEW"
    UNDER_REVIEW = "UNDER_REVIEW"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    SCHEDULED = "SCHEDULED"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"

    # Rejection / revision
    REJECTED = "REJECTED"
    NEEDS_REVISION = "NEEDS_REVISION"
    RETURNED_TO_WRITER = "RETURNED_TO_WRITER"
    ON_HOLD = "ON_HOLD"

    # Specialist desks
    FACT_CHECKING = "FACT_CHECKING"
    LEGAL_REVIEW = "LEGAL_REVIEW"
    COPY_EDIT = "COPY_EDIT"
    PROOFREADING = "PROOFREADING"

    # Post-publication
    UPDATED = "UPDATED"
    RETRACTED = "RETRACTED"
    UNPUBLISHED = "UNPUBLISHED"
    EXPIRED = "EXPIRED"

    # Administrative
    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"
    OVERDUE = "OVERDUE"
    RUSH = "RUSH"

    @property
    def display_name(self) -> str:
        """Human label used by every dashboard"""
        return STATUS_DISPLAY_NAMES[self]


STATUS_DISPLAY_NAMES = {
    ArticleStatus.DRAFT: "Draft",
    ArticleStatus.IN_PROGRESS: "In Progress",
    ArticleStatus.READY_FOR_REVIEW: "Ready for Review",
    ArticleStatus.UNDER_REVIEW: "Under Review",
    ArticleStatus.PENDING_APPROVAL: "Pending Approval",
    ArticleStatus.APPROVED: "Approved",
    ArticleStatus.SCHEDULED: "Scheduled",
    ArticleStatus.PUBLISHED: "Published",
    ArticleStatus.ARCHIVED: "Archived",
    ArticleStatus.REJECTED: "Rejected",
    ArticleStatus.NEEDS_REVISION: "Needs Revision",
    ArticleStatus.RETURNED_TO_WRITER: "Returned to Writer",
    ArticleStatus.ON_HOLD: "On Hold",
    ArticleStatus.FACT_CHECKING: "Fact Checking",
    ArticleStatus.LEGAL_REVIEW: "Legal Review",
    ArticleStatus.COPY_EDIT: "Copy Edit",
    ArticleStatus.PROOFREADING: "Proofreading",
    ArticleStatus.UPDATED: "Updated",
    ArticleStatus.RETRACTED: "Retracted",
    ArticleStatus.UNPUBLISHED: "Unpublished",
    ArticleStatus.EXPIRED: "Expired",
    ArticleStatus.ASSIGNED: "Assigned",
    ArticleStatus.UNASSIGNED: "Unassigned",
    ArticleStatus.OVERDUE: "Overdue",
    ArticleStatus.RUSH: "Rush",
}


class WorkflowAction(str, Enum):
    """Named operations that drive the article state machine"""
    SUBMIT_FOR_REVIEW = "SUBMIT_FOR_REVIEW"
    BEGIN_REVIEW = "BEGIN_REVIEW"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    REQUEST_REVISION = "REQUEST_REVISION"
    RETURN_TO_WRITER = "RETURN_TO_WRITER"
    SCHEDULE = "SCHEDULE"
    PUBLISH = "PUBLISH"
    UNPUBLISH = "UNPUBLISH"
    ARCHIVE = "ARCHIVE"
    SET_FEATURED = "SET_FEATURED"  # Flag only, status unchanged
    SET_TRENDING = "SET_TRENDING"  # Flag only, status unchanged
    START_WORK = "START_WORK"
    ASSIGN = "ASSIGN"
    UNASSIGN = "UNASSIGN"
    ADVANCE_STAGE = "ADVANCE_STAGE"  # Move to the next specialist desk
    PUT_ON_HOLD = "PUT_ON_HOLD"
    RESUME = "RESUME"
    RETRACT = "RETRACT"
    EXPIRE = "EXPIRE"
    RESTORE = "RESTORE"  # Bring an archived article back into the workflow


class TransitionInput(str, Enum):
    """Inputs a transition may require"""
    REASON = "reason"
    FEEDBACK = "feedback"
    SCHEDULED_AT = "scheduled_at"
    FLAG = "flag"
    ASSIGNEE_ID = "assignee_id"


class WorkflowErrorKind(str, Enum):
    """Error kinds returned (not raised) by the workflow engine"""
    INVALID_TRANSITION = "INVALID_TRANSITION"
    MISSING_INPUT = "MISSING_INPUT"
    INVALID_INPUT = "INVALID_INPUT"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"
    NOT_FOUND = "NOT_FOUND"


class UserRole(str, Enum):
    """Newsroom roles, lowest privilege first"""
    USER = "USER"
    REPORTER = "REPORTER"
    CONTRIBUTOR = "CONTRIBUTOR"
    COLUMNIST = "COLUMNIST"
    JOURNALIST = "JOURNALIST"
    AUTHOR = "AUTHOR"
    EDITOR = "EDITOR"
    PUBLISHER = "PUBLISHER"
    ADMIN = "ADMIN"


class DashboardView(str, Enum):
    """Role dashboards that project the workflow"""
    ADMIN = "admin"
    PUBLISHER = "publisher"
    EDITOR = "editor"
    AUTHOR = "author"


class AuditEventType(str, Enum):
    """Types of audit events"""
    ARTICLE_CREATED = "ARTICLE_CREATED"
    STATUS_CHANGED = "STATUS_CHANGED"
    FLAG_CHANGED = "FLAG_CHANGED"
