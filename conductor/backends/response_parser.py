"""
Response parser for LLM-backed advisors.

Handles extracting the JSON object from a raw completion (raw JSON,
markdown code blocks, surrounding prose) and validating it into an
AdvisorResponseV1.
"""

import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from conductor.shared.contracts import AdvisorResponseV1


logger = logging.getLogger(__name__)


REQUIRED_KEYS = {"recommendation", "reasoning", "confidence"}


class ParseError(Exception):
    """Raised when response parsing fails."""

    pass


def extract_json_from_response(raw_response: str) -> str:
    """
    Extract JSON content from LLM response.

    Handles multiple formats:
    - Raw JSON
    - JSON in markdown code blocks (```json ... ```)
    - JSON preceded by prose

    Args:
        raw_response: Raw LLM response string

    Returns:
        Cleaned JSON string ready for parsing
    """
    content = raw_response.strip()

    code_block_pattern = r"```(?:json)?\s*([\s\S]*?)```"
    match = re.search(code_block_pattern, content)
    if match:
        content = match.group(1).strip()

    start = content.find("{")
    if start == -1:
        return content

    # Find matching closing brace
    brace_count = 0
    in_string = False
    escaped = False
    for i, char in enumerate(content[start:], start=start):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            brace_count += 1
        elif char == "}":
            brace_count -= 1
            if brace_count == 0:
                return content[start : i + 1]

    return content[start:]


def parse_advisor_response(raw_response: str) -> AdvisorResponseV1:
    """
    Parse an advisor response from the LLM.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Validated AdvisorResponseV1

    Raises:
        ParseError: If JSON parsing fails, required keys are missing or
            the payload does not validate
    """
    json_str = extract_json_from_response(raw_response)

    try:
        data: Dict[str, Any] = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse advisor response JSON: {e}\nContent: {json_str}")

    if not isinstance(data, dict):
        raise ParseError(f"Advisor response is not a JSON object: {type(data).__name__}")

    missing_keys = REQUIRED_KEYS - set(data.keys())
    if missing_keys:
        raise ParseError(f"Advisor response missing required keys: {missing_keys}")

    if isinstance(data.get("priority"), str):
        data["priority"] = data["priority"].strip().lower()

    try:
        return AdvisorResponseV1.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Advisor response failed validation: {e}")
