from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class VerifiedIdentity(BaseModel):
    """Identity claims accepted from the external identity provider"""
    email: str = Field(..., description="Email claim of the verified token")
    uid: Optional[str] = Field(None, description="Subject of the token at the provider")
    name: Optional[str] = None
    claims: Dict[str, Any] = Field(default_factory=dict)
