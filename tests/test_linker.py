"""Test DependencyLinker node (deterministic)."""

from doc2test.nodes.linker import DependencyLinker


class TestDependencyLinker:
    """Test TF-IDF and explicit-reference linking."""

    def test_explicit_id_reference(self, make_requirement):
        """Test a requirement mentioning another's ID depends on it."""
        requirements = [
            make_requirement(1, "Store customer records", "Persist customer records in the database"),
            make_requirement(2, "Export nightly report", "Export a nightly report after REQ-1 completes"),
        ]

        linked = DependencyLinker.process(requirements)

        assert linked[0].dependencies == []
        assert len(linked[1].dependencies) == 1
        dependency = linked[1].dependencies[0]
        assert dependency.id == "REQ-1"
        assert dependency.type == "depends-on"
        assert dependency.title == "Store customer records"
        assert dependency.similarity is None

    def test_related_by_similarity(self, make_requirement):
        """Test shared vocabulary links requirements both ways."""
        requirements = [
            make_requirement(1, "Password reset", "Users reset a forgotten password by email"),
            make_requirement(2, "Password policy", "Every password needs twelve characters"),
            make_requirement(3, "Export invoices", "Invoices export to PDF"),
        ]

        linked = DependencyLinker.process(requirements)

        assert [dep.id for dep in linked[0].dependencies] == ["REQ-2"]
        assert [dep.id for dep in linked[1].dependencies] == ["REQ-1"]
        assert linked[2].dependencies == []

        related = linked[0].dependencies[0]
        assert related.type == "related"
        assert related.similarity > 0.2
        assert related.similarity == round(related.similarity, 2)

    def test_title_reference(self, make_requirement):
        requirements = [
            make_requirement(1, "Store customer records"),
            make_requirement(2, "Nightly export", "Runs after Store customer records finishes"),
        ]

        references = DependencyLinker._explicit_references(requirements[1], 1, requirements)

        assert [(dep.id, dep.type) for dep in references] == [("REQ-1", "references")]

    def test_deduplicated_first_wins(self, make_requirement):
        """Test one dependency per target; the earlier link type is kept."""
        requirements = [
            make_requirement(1, "Customer records", "Persist customer records"),
            make_requirement(2, "Customer export", "Export Customer records, see REQ-1"),
        ]

        linked = DependencyLinker.process(requirements)

        assert len(linked[1].dependencies) == 1
        assert linked[1].dependencies[0].type == "related"

    def test_never_self_referencing(self, make_requirement):
        requirements = [make_requirement(1, "Mentions REQ-1 itself", "Mentions REQ-1 itself")]

        linked = DependencyLinker.process(requirements)

        assert linked[0].dependencies == []

    def test_input_not_mutated(self, make_requirement):
        requirements = [make_requirement(1, "Store customer records")]

        DependencyLinker.process(requirements)

        assert requirements[0].dependencies is None

    def test_empty(self):
        assert DependencyLinker.process([]) == []
