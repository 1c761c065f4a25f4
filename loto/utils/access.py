"""
Editor / Visitor mode from the shared access code.
Not a security boundary: it only keeps Visitors from mutating data and tags
each history row with the mode that produced it.
"""

from typing import Optional
from fastapi import Header, HTTPException, Depends, status
from loto.config import settings

EDITOR = "Editor"
VISITOR = "Visitor"


def get_user_mode(x_access_code: Optional[str] = Header(default=None)) -> str:
    if x_access_code and x_access_code == settings.EDITOR_ACCESS_CODE:
        return EDITOR
    return VISITOR


def require_editor(user_mode: str = Depends(get_user_mode)) -> str:
    """Dependency for mutating endpoints. Visitors get 403."""
    if user_mode != EDITOR:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="Editor access code required")
    return user_mode
