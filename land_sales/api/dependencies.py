"""Dependency injection for FastAPI endpoints"""

import uuid
from datetime import date
from fastapi import HTTPException, Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Today's date; the only place the API reads the wall clock"""
    return date.today()


def parse_uuid(value: str, label: str) -> uuid.UUID:
    """Parse a path identifier, rejecting malformed IDs with 400"""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")
