"""
Categorizer, MetadataExtractor and StatisticsBuilder (Deterministic)

Groups requirements by type and priority, pulls document metadata out of the
raw text with single-shot regexes, and aggregates run statistics.
"""

from __future__ import annotations
import math
import re
from typing import List
import logging

from nltk import FreqDist
from nltk.corpus import stopwords

from ..models import (
    Requirement,
    CategorizedRequirements,
    DocumentMetadata,
    Statistics,
    PRIORITY_LEVELS,
)
from ..text import tokenize, top_terms

logger = logging.getLogger(__name__)


DEFAULT_KEYWORD_LIMIT = 10

TITLE_PATTERNS = [
    re.compile(r'(?:^|\n)(?:title:|#\s+)([^\n]+)', re.I),
    re.compile(r'^([^.!?\n]+)[.!?]'),
]
AUTHOR_PATTERNS = [
    re.compile(r'\b(?:authors?|prepared by|written by|by)[:\s]+([^,\n]+)', re.I),
]
DATE_PATTERNS = [
    re.compile(r'(?:date|created|prepared|published)[:\s]+([\w\s,]+\d{4})', re.I),
    re.compile(r'(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4})'),
]
VERSION_PATTERNS = [
    re.compile(r'(?:version|v)[:\s]+([0-9.]+)', re.I),
]


class Categorizer:
    """Group requirements by type and priority."""

    @staticmethod
    def process(requirements: List[Requirement]) -> CategorizedRequirements:
        categorized = CategorizedRequirements(all=list(requirements))

        for req in requirements:
            categorized.by_type.setdefault(req.type, []).append(req)
            categorized.by_priority[req.priority].append(req)

        return categorized


class MetadataExtractor:
    """Extract title, author, date, version and keywords from raw text."""

    @staticmethod
    def process(text: str, keyword_limit: int = DEFAULT_KEYWORD_LIMIT) -> DocumentMetadata:
        return DocumentMetadata(
            title=MetadataExtractor._first_group(TITLE_PATTERNS, text),
            author=MetadataExtractor._first_group(AUTHOR_PATTERNS, text),
            date=MetadataExtractor._first_group(DATE_PATTERNS, text),
            version=MetadataExtractor._first_group(VERSION_PATTERNS, text),
            keywords=MetadataExtractor.extract_keywords(text, keyword_limit),
        )

    @staticmethod
    def _first_group(patterns: List[re.Pattern], text: str) -> str:
        """Group 1 of the first pattern that matches, stripped; '' if none match."""
        for pattern in patterns:
            match = pattern.search(text)
            if match and match.group(1):
                return match.group(1).strip()
        return ""

    @staticmethod
    def extract_keywords(text: str, limit: int = DEFAULT_KEYWORD_LIMIT) -> List[str]:
        """
        Most frequent non-stop-word terms of the document.

        Uses NLTK's English stop-word corpus. If the corpus is not installed,
        falls back to a plain frequency count of tokens longer than three
        characters.
        """
        try:
            stop_words = load_stop_words()
        except (LookupError, OSError) as e:
            logger.warning(f"Keyword extraction failed, using frequency fallback: {e}")
            return top_terms(text, limit=limit, min_length=3)

        terms = [
            token.lower() for token in tokenize(text)
            if not token.isdigit() and token.lower() not in stop_words
        ]
        return [term for term, _ in FreqDist(terms).most_common(limit)]


def load_stop_words() -> set:
    """English stop words from the NLTK corpus; raises LookupError if missing."""
    return set(stopwords.words("english"))


class StatisticsBuilder:
    """Aggregate counts and complexity over categorized requirements."""

    @staticmethod
    def process(categorized: CategorizedRequirements) -> Statistics:
        total_requirements = len(categorized.all)
        total_dependencies = sum(len(req.dependencies or []) for req in categorized.all)
        average_dependencies = total_dependencies / max(1, total_requirements)

        by_priority = {
            level: len(categorized.by_priority.get(level, []))
            for level in reversed(PRIORITY_LEVELS)
        }

        return Statistics(
            total_requirements=total_requirements,
            by_type={req_type: len(reqs) for req_type, reqs in categorized.by_type.items()},
            by_priority=by_priority,
            complexity_score=complexity_score(
                total_requirements, average_dependencies, by_priority["High"]
            ),
            average_dependencies=average_dependencies,
            total_dependencies=total_dependencies,
        )


def complexity_score(
    total_requirements: int,
    average_dependencies: float,
    high_priority_count: int
) -> int:
    """``0.6*total + 10*avg_deps + 1.5*high``, rounded half up."""
    raw = total_requirements * 0.6 + average_dependencies * 10 + high_priority_count * 1.5
    return int(math.floor(raw + 0.5))
