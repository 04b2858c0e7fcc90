from conductor.backends.prompts.templates import (
    AdvisorPromptConfig,
    ADVISOR_SYSTEM_PROMPT_TEMPLATE,
    ADVISOR_USER_PROMPT_TEMPLATE,
)
from conductor.backends.prompts.builders import (
    build_prompt_config,
    build_system_prompt,
    build_user_prompt,
)

__all__ = [
    "AdvisorPromptConfig",
    "ADVISOR_SYSTEM_PROMPT_TEMPLATE",
    "ADVISOR_USER_PROMPT_TEMPLATE",
    "build_prompt_config",
    "build_system_prompt",
    "build_user_prompt",
]
