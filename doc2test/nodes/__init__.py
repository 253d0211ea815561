"""
Pipeline nodes for the document-to-test-case pipeline.

The stages, in order:
1. SectionSplitter - Header or paragraph based document segmentation
2. RequirementSectionFilter - Keep requirement-bearing sections
3. RequirementExtractor - Structured requirement records (LightweightExtractor for short documents)
4. DependencyLinker - TF-IDF and explicit-reference dependencies
5. Categorizer / MetadataExtractor / StatisticsBuilder - Grouping and document metadata
6. TestCaseGenerator - Functional, edge-case and negative tests
7. AutomationAdvisor - Automation-suitability labels
"""

from .splitter import SectionSplitter, RequirementSectionFilter
from .extractor import RequirementExtractor, LightweightExtractor
from .linker import DependencyLinker
from .categorizer import Categorizer, MetadataExtractor, StatisticsBuilder
from .generator import TestCaseGenerator
from .automation import AutomationAdvisor

__all__ = [
    "SectionSplitter",
    "RequirementSectionFilter",
    "RequirementExtractor",
    "LightweightExtractor",
    "DependencyLinker",
    "Categorizer",
    "MetadataExtractor",
    "StatisticsBuilder",
    "TestCaseGenerator",
    "AutomationAdvisor",
]
