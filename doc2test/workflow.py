"""
Document-to-Test-Case Workflow

Orchestrates the pipeline:
1. Requirements - full NLP analysis for long documents, lightweight
   extraction for short ones
2. TestCaseGenerator → 3. AutomationAdvisor

Any failure inside a stage fails the whole run with a single
DocumentProcessingError; nothing partial is returned.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, List, Optional
import logging

from .analyzer import analyze_document
from .config import PipelineSettings
from .models import (
    Requirement,
    TestCase,
    ProcessingMetadata,
    ProcessingResult,
    validate_unique_ids,
)
from .nodes import LightweightExtractor, TestCaseGenerator, AutomationAdvisor
from .exceptions import DocumentProcessingError

logger = logging.getLogger(__name__)


def coerce_text(document_text: Any) -> str:
    """Normalize pipeline input to a string (None becomes empty)."""
    if document_text is None:
        return ""
    if isinstance(document_text, bytes):
        return document_text.decode("utf-8", errors="replace")
    return document_text if isinstance(document_text, str) else str(document_text)


def generate_test_cases(requirements: List[Requirement]) -> List[TestCase]:
    """Generate test cases for ``requirements`` and tag them for automation."""
    return AutomationAdvisor.process(TestCaseGenerator.process(requirements))


class DocumentPipeline:
    """
    Main entry point: document text in, requirements and test cases out.

    Holds no state between runs; every call starts with a fresh requirement
    ID counter.
    """

    def __init__(self, settings: Optional[PipelineSettings] = None):
        self.settings = settings or PipelineSettings()

    def uses_full_analysis(self, document_text: str) -> bool:
        """True when the document is long enough for the full NLP path."""
        return len(document_text) > self.settings.lightweight_max_chars

    def process(self, document_text: Any, file_name: str = "") -> ProcessingResult:
        """
        Run the pipeline over one document.

        Args:
            document_text: Document content; non-string input is coerced
            file_name: Name reported back in the result metadata

        Returns:
            ProcessingResult with requirements, test cases and run metadata

        Raises:
            DocumentProcessingError: If any stage fails
        """
        text = coerce_text(document_text)
        logger.info(f"Processing document '{file_name}' ({len(text)} characters)")

        try:
            document_metadata = None
            statistics = None

            if self.uses_full_analysis(text):
                logger.info("Using full NLP analysis")
                analysis = analyze_document(text, self.settings.keyword_limit)
                requirements = analysis.requirements.all
                document_metadata = analysis.metadata
                statistics = analysis.statistics
            else:
                logger.info("Using lightweight extraction")
                requirements = LightweightExtractor.process(text)

            validate_unique_ids(requirements)

            logger.info("Generating test cases...")
            test_cases = generate_test_cases(requirements)

        except Exception as e:
            logger.error(f"Document processing failed: {e}")
            raise DocumentProcessingError(str(e)) from e

        logger.info(f"Extracted {len(requirements)} requirements and "
                    f"generated {len(test_cases)} test cases")

        return ProcessingResult(
            requirements=requirements,
            test_cases=test_cases,
            metadata=ProcessingMetadata(
                file_name=file_name,
                processed_date=datetime.now(timezone.utc),
                requirements_count=len(requirements),
                test_cases_count=len(test_cases),
            ),
            document_metadata=document_metadata,
            statistics=statistics,
        )


def process_document(
    document_text: Any,
    file_name: str = "",
    settings: Optional[PipelineSettings] = None
) -> ProcessingResult:
    """Convenience function to run the pipeline once."""
    return DocumentPipeline(settings).process(document_text, file_name)
