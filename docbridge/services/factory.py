"""
Builds the pipeline's collaborators from application config.

Stored on app.extensions["docbridge"]. Tests swap in their own factory to run
the pipeline against fakes.
"""
from __future__ import annotations

from typing import Any, Mapping, Tuple

from docbridge.pipeline import DocumentPipeline
from docbridge.services.heuristics import HeuristicGenerator
from docbridge.services.openai_service import SummaryGenerator
from docbridge.services.translation_service import GoogleTranslator

ACTION_PLAN_MODES = ("auto", "llm", "heuristic")


class ServiceFactory:
    def __init__(self, config: Mapping[str, Any]):
        self.config = config

    def openai_ready(self) -> Tuple[bool, str]:
        if not (self.config.get("OPENAI_API_KEY") or "").strip():
            return False, "OPENAI_API_KEY is missing"
        return True, ""

    def translation_ready(self) -> Tuple[bool, str]:
        if not (self.config.get("GOOGLE_CLOUD_PROJECT_ID") or "").strip():
            return False, "GOOGLE_CLOUD_PROJECT_ID is missing"
        return True, ""

    def action_plan_mode(self) -> str:
        mode = (self.config.get("ACTION_PLAN_MODE") or "auto").strip().lower()
        if mode not in ACTION_PLAN_MODES:
            mode = "auto"
        if mode == "auto":
            ok, _ = self.openai_ready()
            return "llm" if ok else "heuristic"
        return mode

    def generator(self):
        if self.action_plan_mode() == "heuristic":
            return HeuristicGenerator()
        return SummaryGenerator(
            api_key=self.config.get("OPENAI_API_KEY", ""),
            model=self.config.get("OPENAI_MODEL", "gpt-4.1"),
            timeout=self.config.get("OPENAI_TIMEOUT", 60),
        )

    def translator(self):
        return GoogleTranslator(
            project_id=self.config.get("GOOGLE_CLOUD_PROJECT_ID", ""),
            location=self.config.get("GOOGLE_CLOUD_LOCATION", "global"),
            max_chars=self.config.get("MAX_TRANSLATE_CHUNK", 25_000),
        )

    def pipeline(self) -> DocumentPipeline:
        # Fresh clients per run: each async request gets its own event loop.
        return DocumentPipeline(
            generator=self.generator(),
            translator=self.translator(),
            source_language=self.config.get("TRANSLATION_SOURCE_LANGUAGE", "en"),
        )
