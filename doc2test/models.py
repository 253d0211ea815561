"""
Data models for the document-to-test-case pipeline.

These Pydantic models define the requirements, dependencies, test cases and
document-level artifacts produced by a pipeline run. Attributes are
snake_case in Python and serialize with the camelCase keys consumed by the
UI (``expectedResult``, ``requirementId``, ``testCases``...).
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Dict, Optional, Literal, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


Priority = Literal["High", "Medium", "Low"]
RequirementType = Literal["Functional", "Performance", "Security", "Usability", "Reliability"]
DependencyType = Literal["related", "depends-on", "references"]
TestType = Literal["functional", "edge-case", "negative"]

# Ordered from lowest to highest; priority shifts walk this tuple
PRIORITY_LEVELS = ("Low", "Medium", "High")
REQUIREMENT_TYPES = ("Functional", "Performance", "Security", "Usability", "Reliability")

MAX_TITLE_LENGTH = 70
DOCUMENT_ANALYSIS_SOURCE = "Document Analysis"


class CamelModel(BaseModel):
    """Base model that accepts and emits camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Requirement Models ====================

class Dependency(CamelModel):
    """Link from one requirement to another."""
    id: str = Field(..., description="Target requirement ID")
    title: str = Field(..., description="Target requirement title")
    type: DependencyType = Field(..., description="How the requirements are linked")
    similarity: Optional[float] = Field(None, description="TF-IDF measure for 'related' links")


class Requirement(CamelModel):
    """Structured requirement extracted from a document."""
    id: str = Field(..., description="Run-local ID like REQ-1, REQ-2, etc.")
    title: str = Field(..., description="Short title derived from the first sentence or line")
    description: str = Field(..., description="Full extracted text fragment")
    priority: Priority = Field("Medium", description="Requirement priority")
    type: RequirementType = Field("Functional", description="Requirement category")
    source: Optional[str] = Field(None, description="Extraction source (NLP path only)")
    stakeholders: Optional[List[str]] = Field(None, description="Inferred stakeholder roles (NLP path only)")
    dependencies: Optional[List[Dependency]] = Field(None, description="Linked requirements (NLP path only)")

    @field_validator('id')
    @classmethod
    def validate_id_format(cls, v):
        if not v.startswith('REQ-') or not v[4:].isdigit():
            raise ValueError("ID must be in format 'REQ-{number}' (e.g., REQ-1)")
        return v

    @field_validator('title')
    @classmethod
    def validate_title_length(cls, v):
        if len(v) > MAX_TITLE_LENGTH:
            raise ValueError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
        return v

    @model_validator(mode='after')
    def validate_no_self_dependency(self):
        if self.dependencies and any(dep.id == self.id for dep in self.dependencies):
            raise ValueError(f"Requirement {self.id} cannot depend on itself")
        return self

    @property
    def combined_text(self) -> str:
        """Title and description joined, as used by the classifiers."""
        return f"{self.title} {self.description}"


class TestCase(CamelModel):
    """Candidate test case synthesized from a requirement."""
    __test__ = False  # not a pytest test class

    title: str = Field(..., description="Human-readable test case title")
    description: str = Field(..., description="What the test verifies")
    priority: Priority = Field(..., description="Test priority")
    steps: str = Field(..., description="Newline-delimited numbered procedure")
    expected_result: str = Field(..., description="Expected outcome")
    requirement_id: str = Field(..., description="Back-reference to the source requirement")
    test_type: TestType = Field("functional", description="Kind of test case")
    automation_recommendation: Optional[str] = Field(None, description="Automation suitability label")
    automation_rationale: Optional[str] = Field(None, description="Why the automation label was chosen")

    @field_validator('steps')
    @classmethod
    def validate_non_empty_steps(cls, v):
        if not v.strip():
            raise ValueError("Test case must have at least one step")
        return v

    @property
    def step_list(self) -> List[str]:
        """Non-blank step lines."""
        return [step for step in self.steps.split('\n') if step.strip()]


# ==================== Document Analysis Models ====================

class DocumentMetadata(CamelModel):
    """Heuristically extracted document metadata; every field is optional."""
    title: str = ""
    author: str = ""
    date: str = ""
    version: str = ""
    keywords: List[str] = Field(default_factory=list)


class Statistics(CamelModel):
    """Aggregate statistics over the categorized requirements."""
    total_requirements: int = 0
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(
        default_factory=lambda: {"High": 0, "Medium": 0, "Low": 0}
    )
    complexity_score: int = 0
    average_dependencies: float = 0.0
    total_dependencies: int = 0


class CategorizedRequirements(CamelModel):
    """Requirements grouped by type and priority, plus the flat list."""
    by_type: Dict[str, List[Requirement]] = Field(default_factory=dict)
    by_priority: Dict[str, List[Requirement]] = Field(
        default_factory=lambda: {"High": [], "Medium": [], "Low": []}
    )
    all: List[Requirement] = Field(default_factory=list)


class DocumentAnalysis(CamelModel):
    """Output of the full NLP analysis path."""
    requirements: CategorizedRequirements
    metadata: DocumentMetadata
    statistics: Statistics


# ==================== Pipeline Output ====================

class ProcessingMetadata(CamelModel):
    """Run metadata attached to every pipeline response."""
    file_name: str = Field(..., description="Name of the processed file")
    processed_date: datetime = Field(..., description="UTC timestamp of the run")
    requirements_count: int = 0
    test_cases_count: int = 0


class ProcessingResult(CamelModel):
    """Complete pipeline response."""
    requirements: List[Requirement] = Field(default_factory=list)
    test_cases: List[TestCase] = Field(default_factory=list)
    metadata: ProcessingMetadata
    document_metadata: Optional[DocumentMetadata] = Field(None, description="NLP path only")
    statistics: Optional[Statistics] = Field(None, description="NLP path only")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys; absent optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ==================== Validation Helpers ====================

def validate_unique_ids(items: List[BaseModel], id_field: str = "id") -> None:
    """Validate that all items have unique IDs."""
    ids = [getattr(item, id_field) for item in items]
    duplicates = sorted(id for id in set(ids) if ids.count(id) > 1)
    if duplicates:
        raise ValueError(f"Duplicate IDs found: {duplicates}")
