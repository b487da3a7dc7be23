"""OpenAI summary and action plan generation.

One chat-completions call per document. The model output is untrusted: it is
parsed as JSON and checked against the action plan schema before anything
downstream sees it. There is no repair step; any mismatch is a GenerationError.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from docbridge.errors import GenerationError
from docbridge.models import ActionItem, GeneratedPlan, Priority, ProfessionalType

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a JSON API. Return ONLY valid JSON with no markdown formatting, "
    "no code fences, no explanations. Start your response with { and end with }."
)

NO_PROFESSIONAL = {"", "none", "null"}


def summary_prompt(document_text: str) -> str:
    professionals = ", ".join(p.value for p in ProfessionalType)
    return f"""You are helping immigrants and English-as-a-second-language users understand important legal and medical documents.

Analyze the following document text and respond with a valid JSON object in this exact shape:

{{
  "summary": "<a clear, plain-English summary of the document highlighting the most important facts, dates, deadlines, amounts, and obligations, written so someone unfamiliar with legal or medical jargon can understand it>",
  "actionPlan": [
    {{
      "step": "<short title for this action>",
      "description": "<specific, actionable description referencing concrete details from the document>",
      "priority": "<high | medium | low>",
      "professionalType": "<the type of professional who could help with this step, or null if none needed>"
    }}
  ]
}}

Rules:
- The summary must be 150-400 words.
- The action plan must have 3-5 items, ordered by priority (high first).
- Reference specific details from the document (dates, dollar amounts, names, deadlines).
- Use simple, clear language. Avoid jargon.
- professionalType should be one of: {professionals}, or null.

Document text:
---
{document_text}
---"""


def safe_json_loads(s: str) -> Dict[str, Any]:
    if not s or not s.strip():
        raise GenerationError("Model returned an empty response")

    # Strip markdown code blocks if present
    text = s.strip()
    if text.startswith("```"):
        lines = text.split("\n", 1)
        text = lines[1] if len(lines) > 1 else ""
        if "```" in text:
            text = text.rsplit("```", 1)[0]
        text = text.strip()

    try:
        obj = json.loads(text)
    except ValueError as e:
        raise GenerationError("Model did not return valid json") from e
    if not isinstance(obj, dict):
        raise GenerationError("Model returned an unexpected shape: top level is not an object")
    return obj


def _shape_error(detail: str) -> GenerationError:
    return GenerationError(f"Model returned an unexpected shape: {detail}")


def _required_str(item: Dict[str, Any], name: str, index: int) -> str:
    value = item.get(name)
    if not isinstance(value, str) or not value.strip():
        raise _shape_error(f"actionPlan[{index}].{name} must be a non-empty string")
    return value.strip()


def parse_action_item(item: Any, index: int) -> ActionItem:
    if not isinstance(item, dict):
        raise _shape_error(f"actionPlan[{index}] is not an object")

    step = _required_str(item, "step", index)
    description = _required_str(item, "description", index)

    raw_priority = item.get("priority")
    try:
        priority = Priority(str(raw_priority).strip().lower())
    except ValueError:
        raise _shape_error(f"actionPlan[{index}].priority {raw_priority!r} is not high, medium or low") from None

    raw_prof = item.get("professionalType")
    professional: Optional[ProfessionalType] = None
    if raw_prof is not None:
        if not isinstance(raw_prof, str):
            raise _shape_error(f"actionPlan[{index}].professionalType must be a string or null")
        key = raw_prof.strip().lower()
        if key not in NO_PROFESSIONAL:
            try:
                professional = ProfessionalType(key)
            except ValueError:
                raise _shape_error(f"actionPlan[{index}].professionalType {raw_prof!r} is not allowed") from None

    return ActionItem(step=step, description=description, priority=priority, professional_type=professional)


def validate_generation(obj: Dict[str, Any]) -> GeneratedPlan:
    summary = obj.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise _shape_error("summary must be a non-empty string")

    plan = obj.get("actionPlan")
    if not isinstance(plan, list):
        raise _shape_error("actionPlan must be an array")

    items: List[ActionItem] = [parse_action_item(item, i) for i, item in enumerate(plan)]
    return GeneratedPlan(summary=summary.strip(), action_plan=items)


class SummaryGenerator:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1",
        timeout: int = 60,
        temperature: float = 0.2,
        client: Optional[Any] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model or "gpt-4.1"
        self.timeout = timeout
        self.temperature = temperature
        self._client = client
        self._owns_client = client is None

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise GenerationError("OPENAI_API_KEY is missing")
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def generate(self, document_text: str) -> GeneratedPlan:
        client = self.client
        try:
            res = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": summary_prompt(document_text)},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
        except Exception as e:
            raise GenerationError(f"LLM request failed: {type(e).__name__}: {e}") from e

        choices = getattr(res, "choices", None) or []
        text = (choices[0].message.content or "") if choices else ""
        plan = validate_generation(safe_json_loads(text))
        logger.info("Generated summary (%d chars) and %d action items", len(plan.summary), len(plan.action_plan))
        return plan
