"""
Audit Context

Who is acting and through which request. Built once at the HTTP boundary
and passed explicitly to every audit call. A missing actor means an
anonymous or system action.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActorInfo(BaseModel):
    """Identity snapshot of the user performing an action"""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str
    role: str


class RequestInfo(BaseModel):
    """Request metadata copied onto audit entries"""

    model_config = ConfigDict(frozen=True)

    ip: Optional[str] = None
    user_agent: Optional[str] = None
    url: Optional[str] = None
    method: Optional[str] = None


class AuditContext(BaseModel):
    """Ambient actor and request context for an audited operation"""

    model_config = ConfigDict(frozen=True)

    actor: Optional[ActorInfo] = None
    request: Optional[RequestInfo] = None

    @property
    def is_authenticated(self) -> bool:
        return self.actor is not None

    @classmethod
    def anonymous(cls, request: Optional[RequestInfo] = None) -> "AuditContext":
        return cls(actor=None, request=request)
