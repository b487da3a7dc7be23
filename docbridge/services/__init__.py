"""External collaborators of the document pipeline.

pdf_service: PyPDF2 text extraction
openai_service: LLM summary and action plan
translation_service: Google Cloud Translation with chunking
heuristics: deterministic summary and action plan without an LLM
"""
