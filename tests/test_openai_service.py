"""
Summary / Action Plan Generator Tests
"""
import json
import pytest

from fakes import FakeOpenAI
from docbridge.errors import GenerationError
from docbridge.models import Priority, ProfessionalType
from docbridge.services import openai_service
from docbridge.services.openai_service import (
    SummaryGenerator,
    safe_json_loads,
    summary_prompt,
    validate_generation,
)


def valid_payload(**overrides):
    payload = {
        "summary": "You have an appointment on March 5th.",
        "actionPlan": [
            {
                "step": "Attend the appointment",
                "description": "Arrive at the clinic on March 5th.",
                "priority": "high",
                "professionalType": "medical_interpreter",
            },
            {
                "step": "Bring ID",
                "description": "Bring a photo ID.",
                "priority": "Medium",
                "professionalType": None,
            },
            {
                "step": "Keep the letter",
                "description": "Store this letter with your records.",
                "priority": "low",
            },
        ],
    }
    payload.update(overrides)
    return payload


class TestPrompt:
    """Test the instruction template"""

    def test_embeds_document_verbatim(self):
        text = "Patient has an appointment on March 5th.\nBring ID."
        prompt = summary_prompt(text)
        assert f"---\n{text}\n---" in prompt

    def test_lists_rules(self):
        prompt = summary_prompt("x")
        assert "150-400 words" in prompt
        assert "3-5 items" in prompt
        for name in ("immigration_lawyer", "tax_advisor", "medical_interpreter",
                     "housing_advisor", "family_law_attorney", "benefits_counselor"):
            assert name in prompt


class TestSafeJsonLoads:
    """Test parsing raw model output"""

    def test_plain_json(self):
        assert safe_json_loads('{"a": 1}') == {"a": 1}

    def test_strips_code_fences(self):
        assert safe_json_loads('```json\n{"a": 1}\n```') == {"a": 1}

    def test_empty_output(self):
        with pytest.raises(GenerationError, match="empty response"):
            safe_json_loads("   ")

    def test_invalid_json(self):
        with pytest.raises(GenerationError, match="valid json"):
            safe_json_loads("Here is your summary: {not json}")

    def test_top_level_array_rejected(self):
        with pytest.raises(GenerationError, match="unexpected shape"):
            safe_json_loads("[1, 2]")


class TestValidateGeneration:
    """Test strict schema validation"""

    def test_valid_payload(self):
        plan = validate_generation(valid_payload())

        assert plan.summary == "You have an appointment on March 5th."
        assert [item.priority for item in plan.action_plan] == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
        assert plan.action_plan[0].professional_type == ProfessionalType.MEDICAL_INTERPRETER
        assert plan.action_plan[1].professional_type is None
        assert plan.action_plan[2].professional_type is None

    def test_none_string_means_no_professional(self):
        payload = valid_payload()
        payload["actionPlan"][0]["professionalType"] = "none"
        assert validate_generation(payload).action_plan[0].professional_type is None

    @pytest.mark.parametrize("summary", [None, "", "   ", 42])
    def test_bad_summary(self, summary):
        with pytest.raises(GenerationError, match="summary"):
            validate_generation(valid_payload(summary=summary))

    @pytest.mark.parametrize("plan", [None, "do things", {"step": "x"}])
    def test_action_plan_must_be_array(self, plan):
        with pytest.raises(GenerationError, match="actionPlan must be an array"):
            validate_generation(valid_payload(actionPlan=plan))

    def test_item_must_be_object(self):
        with pytest.raises(GenerationError, match=r"actionPlan\[0\] is not an object"):
            validate_generation(valid_payload(actionPlan=["step one"]))

    def test_missing_description(self):
        payload = valid_payload()
        del payload["actionPlan"][1]["description"]
        with pytest.raises(GenerationError, match=r"actionPlan\[1\]\.description"):
            validate_generation(payload)

    def test_unknown_priority(self):
        payload = valid_payload()
        payload["actionPlan"][0]["priority"] = "urgent"
        with pytest.raises(GenerationError, match="priority"):
            validate_generation(payload)

    def test_unknown_professional_type(self):
        payload = valid_payload()
        payload["actionPlan"][0]["professionalType"] = "astrologer"
        with pytest.raises(GenerationError, match="professionalType"):
            validate_generation(payload)


class TestSummaryGenerator:
    """Test the remote call"""

    @pytest.mark.asyncio
    async def test_generate(self):
        client = FakeOpenAI(content=json.dumps(valid_payload()))
        generator = SummaryGenerator(api_key="sk-test", model="gpt-test", client=client)

        plan = await generator.generate("Patient has an appointment on March 5th.")

        assert len(plan.action_plan) == 3
        calls = client.completions.calls
        assert len(calls) == 1
        assert calls[0]["model"] == "gpt-test"
        assert calls[0]["response_format"] == {"type": "json_object"}
        assert calls[0]["messages"][0]["role"] == "system"
        assert "March 5th" in calls[0]["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self):
        client = FakeOpenAI(error=TimeoutError("timed out"))
        generator = SummaryGenerator(api_key="sk-test", client=client)
        with pytest.raises(GenerationError, match="LLM request failed: TimeoutError"):
            await generator.generate("text")

    @pytest.mark.asyncio
    async def test_empty_response(self):
        generator = SummaryGenerator(api_key="sk-test", client=FakeOpenAI(content=None))
        with pytest.raises(GenerationError, match="empty response"):
            await generator.generate("text")

    @pytest.mark.asyncio
    async def test_malformed_shape(self):
        content = json.dumps({"summary": "ok", "actionPlan": "none"})
        generator = SummaryGenerator(api_key="sk-test", client=FakeOpenAI(content=content))
        with pytest.raises(GenerationError, match="unexpected shape"):
            await generator.generate("text")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        generator = SummaryGenerator(api_key="")
        with pytest.raises(GenerationError, match="OPENAI_API_KEY is missing"):
            await generator.generate("text")


class TestClientLifecycle:
    """The generator closes only the HTTP client it opened"""

    @pytest.mark.asyncio
    async def test_closes_client_it_built(self, monkeypatch):
        client = FakeOpenAI(content=json.dumps(valid_payload()))
        monkeypatch.setattr(openai_service, "AsyncOpenAI", lambda **kwargs: client)
        generator = SummaryGenerator(api_key="sk-test")

        await generator.generate("text")
        await generator.aclose()

        assert client.closed is True

    @pytest.mark.asyncio
    async def test_leaves_injected_client_open(self):
        client = FakeOpenAI(content=json.dumps(valid_payload()))
        generator = SummaryGenerator(api_key="sk-test", client=client)

        await generator.generate("text")
        await generator.aclose()

        assert client.closed is False
