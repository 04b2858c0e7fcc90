"""
Typed prompt templates for LLM-backed advisors.

Prompts are structured as Pydantic models for validation, testability,
and easier version management.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class AdvisorPromptConfig(BaseModel):
    """
    Configuration for advisor system prompt generation.

    Validates the pieces of an advisor context the system prompt needs.
    """

    # Advisor identity
    name: str = Field(description="Advisor name (e.g., '@backend')")
    role: str = Field(description="Advisor role label")
    expertise: List[str] = Field(default_factory=list)
    special_instructions: List[str] = Field(default_factory=list)
    technical_stack: List[str] = Field(default_factory=list)

    # Project context
    project_path: Optional[str] = Field(default=None)
    framework: Optional[str] = Field(default=None)
    language: Optional[str] = Field(default=None)
    experience_level: Optional[str] = Field(default=None)
    dependencies: Dict[str, str] = Field(default_factory=dict)

    # Current standing
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    def format_prompt(self, template: str) -> str:
        """
        Format the template with this config's values.

        Args:
            template: The ADVISOR_SYSTEM_PROMPT_TEMPLATE string

        Returns:
            Formatted prompt string with all placeholders filled
        """
        instructions = (
            "\n".join(f"- {item}" for item in self.special_instructions)
            if self.special_instructions
            else "- None specified"
        )
        dependencies = (
            ", ".join(sorted(self.dependencies)) if self.dependencies else "None specified"
        )

        return template.format(
            name=self.name,
            role=self.role,
            expertise=", ".join(self.expertise) or "General software engineering",
            special_instructions=instructions,
            technical_stack=", ".join(self.technical_stack) or "Not specified",
            project_path=self.project_path or "Not specified",
            framework=self.framework or "Not specified",
            language=self.language or "Not specified",
            experience_level=self.experience_level or "Not specified",
            dependencies=dependencies,
            confidence=f"{self.confidence:.2f}",
        )


# =============================================================================
# Advisor System Prompt Template
# =============================================================================

ADVISOR_SYSTEM_PROMPT_TEMPLATE = """You are {name}, the {role} on a software development advisory team.

## Your Expertise
{expertise}

## Preferred Technical Stack
{technical_stack}

## Working Instructions
{special_instructions}

## Project
- Path: {project_path}
- Framework: {framework}
- Language: {language}
- Developer experience level: {experience_level}
- Dependencies: {dependencies}

Your current confidence in your understanding of this project is {confidence}.

## Task
Answer the developer's question from the perspective of your role only.
Other advisors cover the other disciplines; do not try to answer for them.

## Output Format
Output only valid JSON, with no text before or after it, in this shape:

{{
  "recommendation": "One or two sentences with your concrete recommendation",
  "reasoning": "Why you recommend it, grounded in your expertise and the project",
  "confidence": 0.0,
  "priority": "low | medium | high | critical",
  "implementation_steps": ["Step 1: ...", "Step 2: ..."]
}}

- confidence is a number between 0 and 1
- priority is exactly one of: low, medium, high, critical
- implementation_steps is an ordered list of short steps
"""


ADVISOR_USER_PROMPT_TEMPLATE = """Developer question:
{query}

Respond with the JSON object only."""
