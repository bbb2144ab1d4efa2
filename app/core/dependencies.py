"""
FastAPI dependencies for the application.
"""

from typing import Optional

from fastapi import Header, HTTPException, status

from app.db.session import get_db

__all__ = ["get_db", "get_recruiter_scope"]


async def get_recruiter_scope(x_recruiter_id: Optional[str] = Header(None)) -> Optional[int]:
    """
    Extract the recruiter scope from the X-Recruiter-Id header.

    Returns None when the header is absent (unscoped, admin view).
    Raises 400 if the header is not a positive integer.
    """
    if x_recruiter_id is None or x_recruiter_id == "":
        return None
    try:
        recruiter_id = int(x_recruiter_id)
    except ValueError:
        recruiter_id = 0
    if recruiter_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Recruiter-Id header must be a positive integer"
        )
    return recruiter_id
