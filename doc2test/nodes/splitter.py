"""
SectionSplitter and RequirementSectionFilter (Deterministic)

Breaks a raw document into ordered sections and keeps the ones that look like
they carry requirements. Neither node raises on malformed input: regexes
either match or they don't.
"""

from __future__ import annotations
import re
from typing import List
import logging

logger = logging.getLogger(__name__)


# Not multiline: '^' only anchors the very first header
HEADER_PATTERN = re.compile(
    r'(?:^|\n)(?:\d+\.|\d+\.\d+\s+|[A-Z][A-Za-z\s]+:|\[\w+\]|#\s+|##\s+|###\s+)'
)
PARAGRAPH_BREAK = re.compile(r'\n\s*\n')

REQUIREMENT_KEYWORDS = (
    'requirement', 'requirements', 'feature', 'features', 'specification',
    'specifications', 'functional', 'non-functional', 'user story', 'user stories',
    'must', 'shall', 'should', 'will', 'needs to', 'ability to',
)
NUMBERED_LINE = re.compile(r'^\s*(?:\d+\.|\[\d+\]|\(\d+\))', re.M)
BULLETED_LINE = re.compile(r'^\s*[\-\*•]', re.M)
MODAL_STATEMENT = re.compile(r'\b(?:shall|should|must|will)\b', re.I)


def split_paragraphs(text: str) -> List[str]:
    """Split on blank lines, dropping empty paragraphs."""
    return [part.strip() for part in PARAGRAPH_BREAK.split(text) if part.strip()]


class SectionSplitter:
    """Split document text into logical sections by headers or paragraphs."""

    @staticmethod
    def process(text: str) -> List[str]:
        """
        Split ``text`` into an ordered list of sections.

        If at least two headers are found, each section runs from one header
        to the next (the last to the end of the text). Otherwise the text is
        split into blank-line separated paragraphs.
        """
        matches = list(HEADER_PATTERN.finditer(text))

        if len(matches) > 1:
            sections = []
            for i, match in enumerate(matches):
                end = matches[i + 1].start() if i < len(matches) - 1 else len(text)
                sections.append(text[match.start():end].strip())
            logger.debug(f"Split document into {len(sections)} header sections")
            return sections

        sections = split_paragraphs(text)
        logger.debug(f"Split document into {len(sections)} paragraphs")
        return sections


class RequirementSectionFilter:
    """Keep only the sections that look requirement-bearing."""

    @staticmethod
    def process(sections: List[str]) -> List[str]:
        """Filter sections, preserving their original order."""
        return [s for s in sections if RequirementSectionFilter.is_requirement_section(s)]

    @staticmethod
    def is_requirement_section(section: str) -> bool:
        lower_section = section.lower()

        if any(keyword in lower_section for keyword in REQUIREMENT_KEYWORDS):
            return True
        if NUMBERED_LINE.search(section) or BULLETED_LINE.search(section):
            return True
        return bool(MODAL_STATEMENT.search(lower_section))
