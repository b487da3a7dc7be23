"""
Document pipeline: extract -> generate -> translate.

Stages run strictly in order; any failure short-circuits the rest and is
reported as a ProcessingError. process() never raises.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import replace
from typing import Any, Callable, List, Union

from docbridge.errors import DocBridgeError, ExtractionError, UnsupportedLanguageError
from docbridge.languages import get_language, normalize_key
from docbridge.models import ActionItem, ProcessingError, ProcessingResult
from docbridge.services.pdf_service import NO_TEXT_MESSAGE, extract_pdf_text
from docbridge.utils.concurrency import gather_all

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred during processing"

ProcessingOutput = Union[ProcessingResult, ProcessingError]


class Stage(enum.Enum):
    EXTRACTING = "extracting"
    GENERATING = "generating"
    TRANSLATING = "translating"
    DONE = "done"
    FAILED = "failed"


class DocumentPipeline:
    def __init__(
        self,
        generator: Any,
        translator: Any,
        extractor: Callable[[str], str] = extract_pdf_text,
        source_language: str = "en",
    ):
        self.generator = generator
        self.translator = translator
        self.extractor = extractor
        self.source_language = source_language
        self.stage = None

    def _enter(self, stage: Stage) -> None:
        self.stage = stage
        logger.info("Pipeline stage: %s", stage.value)

    async def process(self, pdf_path: str, language_key: str) -> ProcessingOutput:
        try:
            return await self._run(pdf_path, language_key)
        except DocBridgeError as e:
            failed_at = self.stage.value if self.stage else e.stage
            self.stage = Stage.FAILED
            logger.warning("Pipeline failed while %s: %s", failed_at, e.message)
            return ProcessingError(error=e.message)
        except Exception:
            self.stage = Stage.FAILED
            logger.exception("Pipeline failed unexpectedly")
            return ProcessingError(error=UNEXPECTED_ERROR)
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Release the generator's and translator's remote clients."""
        for service in (self.generator, self.translator):
            close = getattr(service, "aclose", None)
            if close is None:
                continue
            try:
                await close()
            except Exception:
                logger.warning("Failed to close %s", type(service).__name__, exc_info=True)

    async def _run(self, pdf_path: str, language_key: str) -> ProcessingResult:
        language = get_language(language_key)
        if language is None:
            raise UnsupportedLanguageError(f"Unsupported language: {language_key}")

        self._enter(Stage.EXTRACTING)
        full_text = self.extractor(pdf_path)
        if not full_text or not full_text.strip():
            raise ExtractionError(NO_TEXT_MESSAGE)

        self._enter(Stage.GENERATING)
        plan = await self.generator.generate(full_text)

        self._enter(Stage.TRANSLATING)
        translated_summary, *translated_fields = await gather_all(
            self._translate(plan.summary, language.code),
            *self._action_plan_fields(plan.action_plan, language.code),
        )
        action_plan = self._rebuild_action_plan(plan.action_plan, translated_fields)

        self._enter(Stage.DONE)
        return ProcessingResult(
            translated_summary=translated_summary,
            action_plan=action_plan,
            target_language=normalize_key(language_key),
            summary_length=len(translated_summary),
            original_length=len(full_text),
        )

    def _translate(self, text: str, target_code: str):
        return self.translator.translate(text, target_code, self.source_language)

    def _action_plan_fields(self, items: List[ActionItem], target_code: str):
        for item in items:
            yield self._translate(item.step, target_code)
            yield self._translate(item.description, target_code)

    @staticmethod
    def _rebuild_action_plan(items: List[ActionItem], fields: List[str]) -> List[ActionItem]:
        return [
            replace(item, step=fields[2 * i], description=fields[2 * i + 1])
            for i, item in enumerate(items)
        ]
