from __future__ import annotations

import logging
import os
import re
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, conint, field_validator

logger = logging.getLogger(__name__)


class VariableSpec(BaseModel):
    name: str
    required: bool = False
    default: Optional[str] = None


class PromptSpec(BaseModel):
    version: conint(ge=1)
    name: str
    role: str
    content: str
    variables: List[VariableSpec] = Field(default_factory=list)
    metadata: Dict[str, str] = Field(default_factory=dict)

    @field_validator("role")
    @classmethod
    def role_must_be_system(cls, v: str) -> str:
        if v != "system":
            raise ValueError("role must be 'system'")
        return v


DEFAULT_PROMPTS = {
    "answer": "You are an expert assistant.",
    "topic": "You are a topic extractor. Output 1-3 words, the main topic only.",
}


def _render(content: str, values: Dict[str, str]) -> str:
    """Render {{var}} placeholders using a simple replacement."""
    return re.sub(r"\{\{([^}]+)\}\}", lambda m: values.get(m.group(1).strip(), m.group(0)), content)


def _load_spec(path: str) -> PromptSpec:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return PromptSpec(**data)


def _resolve_values(spec: PromptSpec, overrides: Optional[Dict[str, str]]) -> Dict[str, str]:
    overrides = overrides or {}
    resolved: Dict[str, str] = {}
    for v in spec.variables:
        if v.name in overrides:
            resolved[v.name] = overrides[v.name]
        elif v.default is not None:
            resolved[v.name] = v.default
        elif v.required:
            raise ValueError(f"Missing required prompt variable: {v.name}")
    # allow additional overrides not declared in variables
    for k, v in overrides.items():
        resolved.setdefault(k, v)
    return resolved


def _candidate_paths(role: str, filename: str) -> List[Optional[str]]:
    """Return candidate file paths to search for the prompt file."""
    return [
        os.getenv(f"EXPERTFINDER_{role.upper()}_PROMPT_FILE"),
        os.path.join(os.getcwd(), "prompts", filename),
        f"/etc/expertfinder/prompts/{filename}",
    ]


def get_prompt(
    role: str,
    default_filename: Optional[str] = None,
    variables: Optional[Dict[str, str]] = None,
) -> str:
    """Load and render the system prompt for a role ("answer" or "topic").

    Lookup order:
    - EXPERTFINDER_<ROLE>_PROMPT_FILE
    - prompts/<role>.prompt.yaml
    - /etc/expertfinder/prompts/<role>.prompt.yaml
    Fallback to the built-in prompt on error.
    """
    filename = default_filename or f"{role}.prompt.yaml"
    for path in filter(None, _candidate_paths(role, filename)):
        if not os.path.isfile(path):
            continue
        try:
            spec = _load_spec(path)
            values = _resolve_values(spec, variables)
            return _render(spec.content, values)
        except Exception as e:  # noqa: BLE001 - fall through to the next candidate
            logger.warning(f"Ignoring prompt file {path}: {e}")
            continue
    return DEFAULT_PROMPTS[role]
