"""
Full NLP analysis path.

Runs split → filter → extract → link → categorize over a document and
returns the categorized requirements together with document metadata and
statistics.
"""

from __future__ import annotations
import logging

from .models import DocumentAnalysis
from .nodes import (
    SectionSplitter,
    RequirementSectionFilter,
    RequirementExtractor,
    DependencyLinker,
    Categorizer,
    MetadataExtractor,
    StatisticsBuilder,
)
from .nodes.categorizer import DEFAULT_KEYWORD_LIMIT

logger = logging.getLogger(__name__)


def analyze_document(document_text: str, keyword_limit: int = DEFAULT_KEYWORD_LIMIT) -> DocumentAnalysis:
    """
    Extract, link and categorize the requirements of a document.

    Args:
        document_text: Raw UTF-8 document text
        keyword_limit: Maximum number of metadata keywords

    Returns:
        DocumentAnalysis with categorized requirements, metadata and statistics
    """
    logger.info("Stage 1: Splitting document into sections...")
    sections = SectionSplitter.process(document_text)

    logger.info("Stage 2: Identifying requirement sections...")
    requirement_sections = RequirementSectionFilter.process(sections)
    logger.info(f"Kept {len(requirement_sections)} of {len(sections)} sections")

    logger.info("Stage 3: Extracting structured requirements...")
    requirements = RequirementExtractor.process(requirement_sections, document_text)
    logger.info(f"Extracted {len(requirements)} requirements")

    logger.info("Stage 4: Linking requirement dependencies...")
    requirements = DependencyLinker.process(requirements)

    logger.info("Stage 5: Categorizing requirements...")
    categorized = Categorizer.process(requirements)

    return DocumentAnalysis(
        requirements=categorized,
        metadata=MetadataExtractor.process(document_text, keyword_limit),
        statistics=StatisticsBuilder.process(categorized),
    )
