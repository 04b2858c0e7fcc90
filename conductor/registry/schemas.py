"""
Schemas for the advisor registry.

An AdvisorDefinition is the static, immutable description of one advisor
on the team. Definitions are loaded once and never mutated afterwards.
"""

from typing import FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AdvisorDefinition(BaseModel):
    """
    Static definition of one advisor.

    Accepts camelCase keys (``specialInstructions``, ``technicalStack``) as
    well as snake_case field names.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    name: str = Field(description="Unique advisor key (e.g., '@backend')")
    role: str = Field(description="Human-readable role label")
    expertise: Tuple[str, ...] = Field(
        default=(), description="Ordered expertise descriptors"
    )
    priority: int = Field(
        default=0, description="Higher priority is ordered first among independents"
    )
    dependencies: FrozenSet[str] = Field(
        default=frozenset(), description="Names of advisors this one depends on"
    )
    context_template: str = Field(
        default="", description="Name of the context template for this advisor"
    )
    special_instructions: Tuple[str, ...] = Field(default=())
    technical_stack: Tuple[str, ...] = Field(default=())

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("advisor name must not be blank")
        return value.strip()
