from enum import Enum

class UserRole(str, Enum):
    Admin = "admin"
    User = "user"

class ServiceType(str, Enum):
    LinkOne = "link_one"
    LinkTwo = "link_two"
    Medical = "medical"
    Origin = "origin"
    NormalRelocate = "normal_relocate"
    ExpressRelocate = "express_relocate"

class SubmissionStatus(str, Enum):
    Pending = "pending"
    InProgress = "in_progress"
    Approved = "approved"
    Completed = "completed"
    Rejected = "rejected"

class MessageStatus(str, Enum):
    Open = "open"
    InProgress = "in_progress"
    Resolved = "resolved"
    Closed = "closed"

class NotificationType(str, Enum):
    StatusChange = "status_change"
    PaymentVerified = "payment_verified"
    AdminResponse = "admin_response"

class ActivityAction(str, Enum):
    StatusChange = "status_change"
    PaymentVerification = "payment_verification"
    MessageResponse = "message_response"
    BulkApprove = "bulk_approve"
    BulkReject = "bulk_reject"
    BulkPaymentVerify = "bulk_payment_verify"
    UserMessageSent = "user_message_sent"
    SubmissionUpdated = "submission_updated"

class EntityType(str, Enum):
    Submission = "submission"
    Message = "message"
    User = "user"
    BulkAction = "bulk_action"
