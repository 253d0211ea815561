"""
RequirementExtractor and LightweightExtractor (Deterministic)

Turns requirement-bearing sections into structured Requirement records.

The full extractor applies three strategies to every section, in order:
numbered list entries, bulleted list entries and bare modal-verb sentences.
Short documents go through the lightweight extractor instead, which emits one
requirement per qualifying paragraph and skips stakeholder inference.
"""

from __future__ import annotations
import re
from typing import List, Tuple
import logging

from ..models import Requirement, MAX_TITLE_LENGTH, DOCUMENT_ANALYSIS_SOURCE
from ..text import tokenize
from .classifiers import determine_priority, determine_paragraph_priority, determine_type
from .splitter import NUMBERED_LINE, BULLETED_LINE, PARAGRAPH_BREAK

logger = logging.getLogger(__name__)


NUMBERED_ENTRY = re.compile(
    r'^\s*(\d+\.|\[\d+\]|\(\d+\))\s*([^\n]+)'
    r'(?:\n([\s\S]*?)(?=^\s*(?:\d+\.|\[\d+\]|\(\d+\))|$))?',
    re.M
)
BULLETED_ENTRY = re.compile(
    r'^\s*([\-\*•])\s*([^\n]+)'
    r'(?:\n([\s\S]*?)(?=^\s*[\-\*•]|$))?',
    re.M
)
# One match per run, paired with the period or newline that ends it
SENTENCE_CANDIDATE = re.compile(r'([^.\n]*)([.\n]|$)')
# Case-sensitive, unlike the section filter
MODAL_VERB = re.compile(r'\b(?:shall|should|must|will)\b')

MIN_TITLE_LENGTH = 5

STAKEHOLDER_PATTERNS = [
    re.compile(r'\b(?:user|customer|client|stakeholder|admin|administrator|manager|operator|end-user|system administrator)\b', re.I),
    re.compile(r'\b(?:developer|tester|qa|designer|architect|engineer|support|maintenance|operations)\b', re.I),
    re.compile(r'\b(?:business|owner|sponsor|executive|officer|regulator|authority|compliance)\b', re.I),
]
SENTENCE = re.compile(r'[^.!?]+[.!?]+')

LIGHTWEIGHT_KEYWORDS = re.compile(r'must|shall|should|will|needs to|required to|ability to', re.I)
LIST_MARKER = re.compile(r'^\s*(?:\d+\.|\[\d+\]|\(\d+\)|[\-\*•])\s+')
FIRST_SENTENCE = re.compile(r'^[^.!?]+[.!?]')


def truncate_title(text: str, limit: int = MAX_TITLE_LENGTH) -> str:
    """Cap a title at ``limit`` characters, ending truncated titles with '...'."""
    text = text.strip()
    if len(text) > limit:
        return text[:limit - 3] + '...'
    return text


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


class RequirementExtractor:
    """Extract structured requirements from requirement-bearing sections."""

    @staticmethod
    def process(sections: List[str], full_text: str) -> List[Requirement]:
        """
        Extract requirements from every section in order.

        IDs are assigned from a counter that starts at 1 for each call and is
        threaded through the per-section extraction.
        """
        requirements: List[Requirement] = []
        next_id = 1

        for section in sections:
            extracted, next_id = RequirementExtractor.extract_from_section(
                section, full_text, next_id
            )
            requirements.extend(extracted)

        logger.debug(f"Extracted {len(requirements)} requirements from {len(sections)} sections")
        return requirements

    @staticmethod
    def extract_from_section(
        section: str,
        full_text: str,
        next_id: int
    ) -> Tuple[List[Requirement], int]:
        """
        Apply every extraction strategy to one section.

        Returns:
            Tuple of (requirements found, next unused ID number)
        """
        requirements = []
        candidates = (
            RequirementExtractor.list_entries(NUMBERED_ENTRY, section)
            + RequirementExtractor.list_entries(BULLETED_ENTRY, section)
            + [(sentence, sentence) for sentence in RequirementExtractor.modal_sentences(section)]
        )

        for title_text, description in candidates:
            # Too short to be a meaningful requirement
            if len(title_text) < MIN_TITLE_LENGTH:
                continue

            requirements.append(Requirement(
                id=f"REQ-{next_id}",
                title=truncate_title(title_text),
                description=description,
                priority=determine_priority(title_text, description),
                type=determine_type(title_text, description),
                source=DOCUMENT_ANALYSIS_SOURCE,
                stakeholders=RequirementExtractor.extract_stakeholders(
                    title_text, description, full_text
                ),
            ))
            next_id += 1

        return requirements, next_id

    @staticmethod
    def list_entries(pattern: re.Pattern, section: str) -> List[Tuple[str, str]]:
        """(title, description) per list entry; the entry body is the description when present."""
        entries = []
        for match in pattern.finditer(section):
            title_text = match.group(2).strip()
            body = (match.group(3) or "").strip()
            entries.append((title_text, body or title_text))
        return entries

    @staticmethod
    def modal_sentences(section: str) -> List[str]:
        """
        Period-terminated, single-line sentences with a modal verb inside them.

        The modal verb needs at least one character before it and one after it
        within the sentence. Runs without a closing period never qualify.
        """
        sentences = []
        for match in SENTENCE_CANDIDATE.finditer(section):
            body, terminator = match.groups()
            if terminator != '.' or not body:
                continue
            if any(
                verb.start() >= 1 and verb.end() < len(body)
                for verb in MODAL_VERB.finditer(body)
            ):
                sentences.append(f"{body}.".strip())
        return sentences

    @staticmethod
    def extract_stakeholders(title: str, description: str, full_text: str = "") -> List[str]:
        """
        Infer stakeholder roles for a requirement.

        Each role family contributes its first match in the requirement text.
        When nothing matches, sentences of the full document that share a
        title token longer than three characters are searched instead.
        """
        stakeholders: List[str] = []

        def collect(text: str) -> None:
            for pattern in STAKEHOLDER_PATTERNS:
                match = pattern.search(text)
                if match:
                    stakeholder = _capitalize(match.group(0))
                    if stakeholder not in stakeholders:
                        stakeholders.append(stakeholder)

        collect(f"{title} {description}".lower())

        if not stakeholders and full_text:
            title_tokens = [token.lower() for token in tokenize(title) if len(token) > 3]
            for sentence in SENTENCE.findall(full_text):
                lower_sentence = sentence.lower()
                if any(token in lower_sentence for token in title_tokens):
                    collect(lower_sentence)

        return stakeholders


class LightweightExtractor:
    """
    One requirement per qualifying paragraph, for short documents.

    No stakeholder inference or dependency linking happens on this path, so
    the resulting requirements carry no source, stakeholders or dependencies.
    """

    @staticmethod
    def process(text: str) -> List[Requirement]:
        requirements = []

        for paragraph in PARAGRAPH_BREAK.split(text):
            if not paragraph.strip():
                continue
            if not LightweightExtractor.is_requirement_paragraph(paragraph):
                continue

            description = paragraph.strip()
            title = LightweightExtractor.extract_title(paragraph)
            requirements.append(Requirement(
                id=f"REQ-{len(requirements) + 1}",
                title=title,
                description=description,
                priority=determine_paragraph_priority(paragraph),
                type=determine_type(title, description),
            ))

        logger.debug(f"Lightweight extraction found {len(requirements)} requirements")
        return requirements

    @staticmethod
    def is_requirement_paragraph(paragraph: str) -> bool:
        return bool(
            LIGHTWEIGHT_KEYWORDS.search(paragraph)
            or NUMBERED_LINE.search(paragraph)
            or BULLETED_LINE.search(paragraph)
        )

    @staticmethod
    def extract_title(paragraph: str) -> str:
        """First sentence of the paragraph, else its first line, list marker removed."""
        text = LIST_MARKER.sub('', paragraph.strip(), count=1)

        match = FIRST_SENTENCE.match(text)
        if match:
            title = truncate_title(match.group(0))
        else:
            title = truncate_title(text.split('\n')[0])

        return title or truncate_title(paragraph)
