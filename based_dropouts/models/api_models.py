"""
API response models for the Based Dropouts site.

All JSON endpoints wrap their payload in ``ApiResponse``.
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

# Type variable for response data
T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """
    Standard API response model.
    """
    success: bool = Field(True, description="Whether the request was successful")
    data: Optional[T] = Field(None, description="Response data payload")
    message: Optional[str] = Field(None, description="Human readable status message")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="UTC timestamp of the response"
    )
