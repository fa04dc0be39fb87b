from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
import uuid


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class OperationResult(BaseModel):
    success: bool = True
    message: Optional[str] = None
