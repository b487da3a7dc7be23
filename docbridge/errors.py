"""
Exception taxonomy for the document pipeline.

Services raise these; DocumentPipeline.process converts them into a
ProcessingError result, so none of them cross the pipeline boundary.
"""


class DocBridgeError(Exception):
    """Base class for every expected pipeline failure"""

    stage = "pipeline"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedLanguageError(DocBridgeError):
    stage = "language"


class ExtractionError(DocBridgeError):
    stage = "extracting"


class GenerationError(DocBridgeError):
    stage = "generating"


class TranslationError(DocBridgeError):
    stage = "translating"
