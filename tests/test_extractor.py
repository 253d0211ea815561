"""Test RequirementExtractor and LightweightExtractor nodes (deterministic)."""

import time
import pytest

from doc2test.nodes.extractor import (
    RequirementExtractor,
    LightweightExtractor,
    truncate_title,
)


class TestRequirementExtractor:
    """Test structured extraction on the full NLP path."""

    def test_numbered_entries(self):
        """Test numbered list entries become requirements with sequential IDs."""
        section = (
            "Requirements\n"
            "1. The user must be able to reset a password\n"
            "2. Reports should export nightly"
        )

        requirements = RequirementExtractor.process([section], section)

        assert [req.id for req in requirements] == ["REQ-1", "REQ-2"]
        first, second = requirements
        assert first.title == "The user must be able to reset a password"
        assert first.description == first.title
        assert first.priority == "High"
        assert first.type == "Security"
        assert first.source == "Document Analysis"
        assert first.stakeholders == ["User"]
        assert second.priority == "Medium"
        assert second.type == "Functional"

    def test_entry_body_becomes_description(self):
        section = "- Export reports\n  Reports are written as CSV files\n- Import data files"

        requirements = RequirementExtractor.process([section], section)

        assert requirements[0].title == "Export reports"
        assert requirements[0].description == "Reports are written as CSV files"

    def test_short_titles_skipped_without_consuming_ids(self):
        section = "1. Go\n2. The system shall log every request"

        requirements = RequirementExtractor.process([section], section)

        assert len(requirements) == 1
        assert requirements[0].id == "REQ-1"
        assert requirements[0].title == "The system shall log every request"

    def test_modal_sentences_are_case_sensitive(self):
        """Test bare sentences need a lowercase modal verb and a full stop."""
        section = "The system will encrypt stored files. The system WILL purge logs. Users like it."

        requirements = RequirementExtractor.process([section], section)

        assert [req.title for req in requirements] == ["The system will encrypt stored files."]

    def test_counter_threads_across_sections(self):
        sections = ["1. First requirement here", "2. Second requirement here"]

        requirements = RequirementExtractor.process(sections, "")

        assert [req.id for req in requirements] == ["REQ-1", "REQ-2"]

    def test_counter_restarts_per_call(self):
        sections = ["1. First requirement here"]

        RequirementExtractor.process(sections, "")
        requirements = RequirementExtractor.process(sections, "")

        assert requirements[0].id == "REQ-1"

    def test_long_titles_truncated(self):
        entry = "The system must " + "really " * 20 + "work"
        section = f"1. {entry}"

        requirements = RequirementExtractor.process([section], section)

        assert len(requirements[0].title) == 70
        assert requirements[0].title.endswith("...")
        assert requirements[0].description == entry


class TestStakeholders:
    """Test stakeholder inference."""

    def test_one_match_per_role_family(self):
        stakeholders = RequirementExtractor.extract_stakeholders(
            "Customer data",
            "The developer exports customer data for the compliance team and the user",
        )

        assert stakeholders == ["Customer", "Developer", "Compliance"]

    def test_fallback_to_document_sentences(self):
        """Test sentences sharing a title word supply stakeholders."""
        stakeholders = RequirementExtractor.extract_stakeholders(
            "Nightly export job",
            "Nightly export job",
            "The administrator schedules the nightly export. Other text.",
        )

        assert stakeholders == ["Administrator"]

    def test_no_stakeholders(self):
        assert RequirementExtractor.extract_stakeholders("Nightly export", "Nightly export") == []


class TestLightweightExtractor:
    """Test one-requirement-per-paragraph extraction."""

    def test_scenario_two_paragraphs(self, scenario_a_text):
        """Test IDs, titles and paragraph priorities."""
        requirements = LightweightExtractor.process(scenario_a_text)

        assert [req.id for req in requirements] == ["REQ-1", "REQ-2"]
        assert requirements[0].title == "The system must allow users to log in."
        assert requirements[0].priority == "High"
        assert requirements[1].priority == "Medium"
        assert requirements[0].description == "1. The system must allow users to log in."

    def test_no_nlp_fields(self, scenario_a_text):
        for req in LightweightExtractor.process(scenario_a_text):
            assert req.source is None
            assert req.stakeholders is None
            assert req.dependencies is None

    def test_skips_non_requirement_paragraphs(self):
        text = "Intro paragraph without keywords.\n\n- Users must be able to export reports"

        requirements = LightweightExtractor.process(text)

        assert len(requirements) == 1
        assert requirements[0].id == "REQ-1"
        assert requirements[0].title == "Users must be able to export reports"

    def test_empty_text(self):
        assert LightweightExtractor.process("") == []


class TestTruncateTitle:
    """Test title truncation."""

    def test_short_title_unchanged(self):
        assert truncate_title("  Short title  ") == "Short title"

    def test_long_title(self):
        title = truncate_title("a" * 80)
        assert title == "a" * 67 + "..."


class TestModalSentences:
    """Test modal-verb sentence detection."""

    @pytest.mark.parametrize("section,expected", [
        ("Users must log in. Nothing here.", ["Users must log in."]),
        ("must log in.", []),
        ("Users must.", []),
        ("Users must log in", []),
        ("Users must log\nin.", []),
        ("The admin shall approve. The user will confirm.",
         ["The admin shall approve.", "The user will confirm."]),
        ("Trustworthy musters.", []),
    ])
    def test_sentence_rules(self, section, expected):
        assert RequirementExtractor.modal_sentences(section) == expected

    def test_long_unpunctuated_line_is_fast(self):
        """Test a long run of modal verbs without a period is scanned in linear time."""
        section = "the system must " * 5000

        start = time.perf_counter()
        requirements = RequirementExtractor.process([section], section)
        elapsed = time.perf_counter() - start

        assert requirements == []
        assert elapsed < 2.0
