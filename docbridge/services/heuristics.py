"""
Deterministic summary and action plan, no LLM involved.

The document is classified by keyword into one of eight templates
(legal, report, financial, proposal, policy, meeting, research, general);
each template yields a fixed three-step plan whose first step mentions the
document's most frequent terms.
"""
from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from docbridge.models import ActionItem, GeneratedPlan, Priority

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "should", "could", "may", "might", "must", "can", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
})

# First match wins, so order matters.
DOCUMENT_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("legal", ("agreement", "contract")),
    ("report", ("report", "analysis")),
    ("financial", ("invoice", "payment")),
    ("proposal", ("proposal", "recommendation")),
    ("policy", ("policy", "procedure")),
    ("meeting", ("minutes", "meeting")),
    ("research", ("research", "study")),
)

# (step, description, priority); "{terms}" is filled with the top key terms.
TEMPLATES: Dict[str, List[Tuple[str, str, Priority]]] = {
    "legal": [
        ("Review legal terms and obligations",
         "Carefully examine all contractual obligations, deadlines, and legal requirements mentioned in the document. Pay special attention to terms related to: {terms}.", Priority.HIGH),
        ("Consult with legal counsel",
         "Schedule a meeting with your legal team to discuss implications and ensure full understanding of all clauses before proceeding.", Priority.HIGH),
        ("Create compliance checklist",
         "Develop a detailed checklist of all requirements and deadlines to ensure nothing is missed during implementation.", Priority.MEDIUM),
    ],
    "financial": [
        ("Verify all financial figures",
         "Cross-check all amounts, calculations, and financial data for accuracy. Focus on items related to: {terms}.", Priority.HIGH),
        ("Process payment or billing",
         "Initiate necessary payment procedures or update accounting records according to the document details.", Priority.HIGH),
        ("Archive for record-keeping",
         "File the document in your financial records system and set reminders for any recurring payments or reviews.", Priority.MEDIUM),
    ],
    "report": [
        ("Analyze key findings and data",
         "Review the main conclusions and data points, especially those concerning: {terms}. Identify trends and patterns.", Priority.HIGH),
        ("Share with relevant stakeholders",
         "Distribute the report to team members and departments who need to be informed of these findings.", Priority.MEDIUM),
        ("Develop action items from recommendations",
         "Create specific tasks based on the report recommendations and assign responsibilities with deadlines.", Priority.MEDIUM),
    ],
    "proposal": [
        ("Evaluate proposal feasibility",
         "Assess the viability and resource requirements of the proposed ideas, particularly regarding: {terms}.", Priority.HIGH),
        ("Gather stakeholder feedback",
         "Present the proposal to key decision-makers and collect their input, concerns, and suggestions.", Priority.HIGH),
        ("Create implementation roadmap",
         "If approved, develop a detailed timeline and resource allocation plan for executing the proposal.", Priority.MEDIUM),
    ],
    "policy": [
        ("Understand policy requirements",
         "Thoroughly review all policy guidelines and requirements, especially those related to: {terms}.", Priority.HIGH),
        ("Communicate to affected parties",
         "Inform all employees or individuals affected by this policy and provide necessary training or guidance.", Priority.HIGH),
        ("Implement compliance measures",
         "Set up systems and processes to ensure ongoing compliance with the policy requirements.", Priority.MEDIUM),
    ],
    "meeting": [
        ("Follow up on action items",
         "Review all assigned tasks from the meeting and send reminders to responsible parties. Priority topics include: {terms}.", Priority.HIGH),
        ("Distribute meeting minutes",
         "Share the meeting summary with all attendees and relevant stakeholders who were unable to attend.", Priority.MEDIUM),
        ("Schedule follow-up meeting",
         "If needed, schedule a follow-up session to track progress on decisions and action items.", Priority.LOW),
    ],
    "research": [
        ("Validate research methodology",
         "Review the research approach and data collection methods. Consider implications for: {terms}.", Priority.HIGH),
        ("Apply findings to current work",
         "Identify how the research conclusions can be integrated into ongoing projects or inform future decisions.", Priority.MEDIUM),
        ("Share insights with team",
         "Present relevant findings to your team and discuss potential applications or further research needs.", Priority.MEDIUM),
    ],
    "general": [
        ("Review complete document thoroughly",
         "Read through the entire document carefully, paying attention to sections about: {terms}. Note any questions or unclear points.", Priority.HIGH),
        ("Identify key stakeholders",
         "Determine who needs to be informed or consulted about this document and reach out to them promptly.", Priority.MEDIUM),
        ("Take required actions",
         "Complete any tasks, decisions, or responses indicated in the document within specified timeframes.", Priority.MEDIUM),
    ],
}

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def summarize_text(text: str, max_length: int = 1000) -> str:
    clean = re.sub(r"\s+", " ", text or "").strip()
    sentences = _SENTENCE_RE.findall(clean) or [clean]

    summary = ""
    for sentence in sentences:
        sentence = sentence.strip()
        if len(summary) + len(sentence) > max_length:
            break
        summary += sentence + " "

    if len(summary) < 100 and len(clean) > 100:
        summary = clean[:max_length] + "..."
    return summary.strip()


def extract_key_terms(text: str, limit: int = 10) -> List[str]:
    words = re.sub(r"[^\w\s]", " ", (text or "").lower()).split()
    counts = Counter(w for w in words if len(w) > 3 and w not in STOP_WORDS)
    # most_common keeps first-seen order among equal counts
    return [word for word, _ in counts.most_common(limit)]


def detect_document_type(text: str) -> str:
    lower = (text or "").lower()
    for doc_type, keywords in DOCUMENT_RULES:
        if any(k in lower for k in keywords):
            return doc_type
    return "general"


def build_action_plan(text: str, summary: Optional[str] = None) -> List[ActionItem]:
    """Pick a template from the full text and fill it with the summary's key terms."""
    terms = ", ".join(extract_key_terms(text if summary is None else summary)[:3])
    return [
        ActionItem(step=step, description=description.format(terms=terms), priority=priority)
        for step, description, priority in TEMPLATES[detect_document_type(text)]
    ]


class HeuristicGenerator:
    """Drop-in for SummaryGenerator when no LLM is configured."""

    def __init__(self, summary_length: int = 1000):
        self.summary_length = summary_length

    async def generate(self, document_text: str) -> GeneratedPlan:
        summary = summarize_text(document_text, self.summary_length)
        return GeneratedPlan(summary=summary, action_plan=build_action_plan(document_text, summary))
