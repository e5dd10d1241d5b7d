"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Optional

from fastapi import Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def resolve_today(today: Optional[date]) -> date:
    """Evaluation date for time-dependent rules; the only wall clock read"""
    return today or date.today()
