"""Test the priority and type rule tables."""

import pytest

from doc2test.nodes.classifiers import (
    determine_priority,
    determine_paragraph_priority,
    determine_type,
    shift_priority,
)


class TestPriority:
    """Test requirement priority classification."""

    @pytest.mark.parametrize("title,description,expected", [
        ("Login", "The system must authenticate users", "High"),
        ("Dark mode", "Users may toggle dark mode", "Low"),
        ("Reports", "Generate weekly reports", "Medium"),
        ("Critical path", "Nice to have later", "High"),
    ])
    def test_determine_priority(self, title, description, expected):
        assert determine_priority(title, description) == expected

    def test_word_boundaries(self):
        """Test keywords inside longer words do not count."""
        assert determine_priority("Mustard", "Condiment selection") == "Medium"

    @pytest.mark.parametrize("paragraph,expected", [
        ("The system must log in users.", "High"),
        ("The page should load quickly.", "Medium"),
        ("An important note.", "Medium"),
        ("Optional export of data.", "Low"),
        ("Plain statement.", "Medium"),
    ])
    def test_paragraph_priority(self, paragraph, expected):
        assert determine_paragraph_priority(paragraph) == expected

    def test_paragraph_priority_matches_substrings(self):
        assert determine_paragraph_priority("Mustard selection") == "High"


class TestType:
    """Test requirement type classification."""

    @pytest.mark.parametrize("title,description,expected", [
        ("Login", "Encrypt the password", "Security"),
        ("Search", "Response time under 2 seconds", "Performance"),
        ("Backup", "Nightly backup of the database", "Reliability"),
        ("Screens", "An intuitive layout", "Usability"),
        ("Nightly export", "Nightly export", "Functional"),
    ])
    def test_determine_type(self, title, description, expected):
        assert determine_type(title, description) == expected

    def test_precedence(self):
        """Test the first category in precedence order wins."""
        assert determine_type("Fast feature", "A fast feature") == "Functional"


class TestShiftPriority:
    """Test priority shifting."""

    @pytest.mark.parametrize("priority,adjustment,expected", [
        ("High", -1, "Medium"),
        ("Medium", -1, "Low"),
        ("Low", -1, "Low"),
        ("High", 1, "High"),
        ("Low", 1, "Medium"),
    ])
    def test_shift_is_clamped(self, priority, adjustment, expected):
        assert shift_priority(priority, adjustment) == expected

    def test_unknown_priority_unchanged(self):
        assert shift_priority("Urgent", -1) == "Urgent"
