"""
doc2test - Document to Test Case Generator

Turns plain-text requirement documents into structured requirements and
candidate test cases using deterministic text analysis.
Features section splitting, TF-IDF dependency linking, rule-based
classification and automation-suitability recommendations.
"""

__version__ = "0.1.0"
__all__ = [
    "DocumentPipeline",
    "process_document",
    "ProcessingResult",
    "Requirement",
    "TestCase",
    "DocumentProcessingError"
]

from .models import ProcessingResult, Requirement, TestCase
from .workflow import DocumentPipeline, process_document
from .exceptions import DocumentProcessingError
