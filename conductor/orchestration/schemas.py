"""
Orchestration schemas.

Defines the lifecycle states, the mutable per-session advisor instance,
the consultation request and the read-only status view handed to callers.
"""

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from conductor.registry.schemas import AdvisorDefinition


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdvisorStatus(str, Enum):
    """Lifecycle states of an advisor instance."""

    INITIALIZING = "initializing"
    READY = "ready"
    BUSY = "busy"
    ERROR = "error"
    OFFLINE = "offline"


class ConsultationPriority(str, Enum):
    """Priority levels of a consultation request."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass
class AdvisorInstance:
    """
    One live advisor in the current session.

    Mutable fields (status, confidence, current_task, last_activity, error)
    are only changed by the LifecycleManager while holding ``lock``.
    """

    definition: AdvisorDefinition
    status: AdvisorStatus = AdvisorStatus.INITIALIZING
    confidence: float = 0.0
    current_task: Optional[str] = None
    last_activity: datetime = field(default_factory=_utcnow)
    context: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    has_been_ready: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.definition.name


class ConsultationRequest(BaseModel):
    """A single in-flight consultation."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Opaque consultation id")
    query: str = Field(description="Free-text query")
    required_advisors: List[str] = Field(
        default_factory=list, description="Advisors the consultation is dispatched to"
    )
    optional_advisors: List[str] = Field(default_factory=list)
    priority: ConsultationPriority = Field(default=ConsultationPriority.MEDIUM)
    created_at: datetime = Field(default_factory=_utcnow)


class AdvisorStatusView(BaseModel):
    """Read-only snapshot of one advisor's state."""

    name: str
    role: str
    status: AdvisorStatus
    confidence: float = Field(ge=0.0, le=1.0)
    current_task: Optional[str] = None
    last_activity: datetime
    error: Optional[str] = None
