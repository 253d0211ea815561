"""Test the end-to-end document pipeline."""

import pytest

from doc2test import workflow
from doc2test.config import PipelineSettings
from doc2test.exceptions import DocumentProcessingError
from doc2test.workflow import DocumentPipeline, process_document, coerce_text


LOREM = "lorem ipsum dolor " * 100


class TestLightweightPath:
    """Test short documents."""

    def test_two_paragraph_document(self, scenario_a_text):
        """Test one requirement per paragraph with paragraph priorities."""
        result = process_document(scenario_a_text, "login.txt")

        assert [req.priority for req in result.requirements] == ["High", "Medium"]
        assert result.metadata.file_name == "login.txt"
        assert result.metadata.requirements_count == 2
        assert result.metadata.test_cases_count == len(result.test_cases)
        assert all(tc.automation_recommendation for tc in result.test_cases)
        assert result.statistics is None
        assert result.document_metadata is None

    def test_serialized_shape(self, scenario_a_text):
        data = process_document(scenario_a_text, "login.txt").to_dict()

        assert set(data) == {"requirements", "testCases", "metadata"}
        assert "source" not in data["requirements"][0]
        assert "automationRecommendation" in data["testCases"][0]
        assert "automationRationale" in data["testCases"][0]

    def test_empty_document(self):
        """Test empty input yields an empty result instead of an error."""
        data = process_document("").to_dict()

        assert data["requirements"] == []
        assert data["testCases"] == []
        assert data["metadata"]["requirementsCount"] == 0
        assert data["metadata"]["testCasesCount"] == 0

    def test_none_document(self):
        assert process_document(None).requirements == []


class TestFullAnalysisPath:
    """Test long documents."""

    def test_nlp_result(self, requirements_document):
        assert len(requirements_document) > 1000

        result = process_document(requirements_document, "inventory.txt")

        assert result.requirements
        assert result.statistics.total_requirements == len(result.requirements)
        assert result.document_metadata.title == "Inventory Management System"
        assert all(req.source == "Document Analysis" for req in result.requirements)
        assert all(req.dependencies is not None for req in result.requirements)

    def test_invariants(self, requirements_document):
        """Test unique IDs, title lengths and no self-dependencies."""
        requirements = process_document(requirements_document).requirements

        ids = [req.id for req in requirements]
        assert len(ids) == len(set(ids))
        for req in requirements:
            assert len(req.title) <= 70
            assert req.priority in ("High", "Medium", "Low")
            assert all(dep.id != req.id for dep in req.dependencies)

    def test_idempotent(self, requirements_document):
        first = process_document(requirements_document)
        second = process_document(requirements_document)

        assert [req.model_dump() for req in first.requirements] == \
            [req.model_dump() for req in second.requirements]
        assert first.test_cases == second.test_cases

    def test_serialized_supplements(self, requirements_document):
        data = process_document(requirements_document).to_dict()

        assert "documentMetadata" in data
        assert data["statistics"]["byPriority"].keys() == {"High", "Medium", "Low"}


class TestThreshold:
    """Test the path selection by document length."""

    def test_length_threshold(self, scenario_a_text):
        pipeline = DocumentPipeline()
        short = (scenario_a_text + "\n\n" + LOREM)[:999]
        long = (scenario_a_text + "\n\n" + LOREM)[:1001]

        assert not pipeline.uses_full_analysis(short)
        assert pipeline.uses_full_analysis(long)
        assert not pipeline.uses_full_analysis("x" * 1000)

        assert pipeline.process(short).statistics is None
        assert pipeline.process(long).statistics is not None

    def test_configurable_threshold(self, scenario_a_text):
        pipeline = DocumentPipeline(PipelineSettings(lightweight_max_chars=10))

        result = pipeline.process(scenario_a_text)

        assert result.statistics is not None


class TestErrorHandling:
    """Test failure wrapping."""

    def test_stage_failure_wrapped(self, scenario_a_text, monkeypatch):
        def broken(requirements):
            raise RuntimeError("boom")

        monkeypatch.setattr(workflow, "generate_test_cases", broken)

        with pytest.raises(DocumentProcessingError) as exc_info:
            process_document(scenario_a_text)

        assert str(exc_info.value) == "Failed to process document: boom"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (b"bytes text", "bytes text"),
        (42, "42"),
        ("text", "text"),
    ])
    def test_coerce_text(self, value, expected):
        assert coerce_text(value) == expected
