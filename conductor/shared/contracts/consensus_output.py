"""
Consensus output contract.

Defines the aggregated result of one consultation: the per-advisor
recommendation records and the consensus statistics computed over them.
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field

from conductor.shared.contracts.advisor_response import ResponsePriority


class RecommendationRecord(BaseModel):
    """One advisor's contribution to a consensus."""

    advisor: str = Field(description="Advisor name (e.g., '@backend')")
    role: str = Field(description="Advisor role label")
    confidence: float = Field(ge=0.0, le=1.0, description="Clamped advisor confidence")
    recommendation: str = Field(description="The advisor's recommendation")
    reasoning: str = Field(description="The advisor's reasoning")
    priority: ResponsePriority = Field(description="Recommendation priority")
    implementation_steps: List[str] = Field(
        default_factory=list, description="Ordered implementation steps"
    )


class ConsensusResultV1(BaseModel):
    """
    Contract for a consultation's consensus (v1).

    A result with zero participants is a valid outcome: consensus_level
    and average_confidence_percent are None and is_empty is True.
    """

    consultation_id: str = Field(description="Identifier of the originating consultation")
    query: str = Field(description="The originating query")
    consensus_level: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Mean confidence of participating advisors (None if nobody participated)",
    )
    participant_count: int = Field(ge=0, description="Number of recommendation records")
    average_confidence_percent: Optional[int] = Field(
        default=None, ge=0, le=100, description="Consensus level as a rounded percentage"
    )
    recommendations: List[RecommendationRecord] = Field(
        default_factory=list, description="Per-advisor records in dispatch order"
    )
    failed_advisors: List[str] = Field(
        default_factory=list,
        description="Advisors excluded because their backend call failed or timed out",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the consensus was produced",
    )

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """True when no advisor contributed to this consensus."""
        return self.participant_count == 0
