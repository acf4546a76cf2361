from pydantic import BaseModel
from typing import List, Dict

from app.schemas.activity import ActivityLogRead


class AdminDashboardStats(BaseModel):
    total_submissions: int
    verified_payments: int
    pending_submissions: int
    total_messages: int
    open_messages: int
    closed_messages: int
    total_users: int
    verification_rate: int
    response_rate: int
    avg_submissions_per_user: float
    recent_activity: List[ActivityLogRead] = []


class TrendPoint(BaseModel):
    date: str
    label: str
    submissions: int


class UserDashboardStats(BaseModel):
    total_submissions: int
    pending_submissions: int
    approved_submissions: int
    rejected_submissions: int
    verified_payments: int
    total_messages: int
    open_messages: int
    status_breakdown: Dict[str, int]
    submission_trend: List[TrendPoint]
