"""
Advisor response contract.

Defines the structured response a response backend produces for one
advisor answering one consultation query.
"""

from typing import List, Literal
from pydantic import BaseModel, Field


ResponsePriority = Literal["low", "medium", "high", "critical"]


class AdvisorResponseV1(BaseModel):
    """
    Contract for a single advisor's response (v1).

    The confidence is whatever the backend reports; the orchestration
    core clamps it to [0, 1] before it is stored or aggregated.
    """

    recommendation: str = Field(description="The advisor's recommendation")
    reasoning: str = Field(description="Why the advisor recommends it")
    confidence: float = Field(
        allow_inf_nan=False,
        description="Self-reported confidence, expected in [0, 1]",
    )
    priority: ResponsePriority = Field(
        default="medium", description="Urgency of acting on the recommendation"
    )
    implementation_steps: List[str] = Field(
        default_factory=list, description="Ordered steps to carry out the recommendation"
    )

    class Config:
        """Pydantic model configuration."""

        json_schema_extra = {
            "example": {
                "recommendation": "Add a composite index on (user_id, created_at)",
                "reasoning": "The slow query filters on user_id and sorts by created_at",
                "confidence": 0.88,
                "priority": "high",
                "implementation_steps": [
                    "Step 1: Analysis and planning",
                    "Step 2: Implementation approach",
                    "Step 3: Testing and validation",
                ],
            }
        }
