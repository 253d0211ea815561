"""
DependencyLinker Node (Deterministic)

Links requirements to each other in two ways:

1. ``related``: TF-IDF measure between stemmed requirement texts above 0.2
2. ``depends-on`` / ``references``: the requirement text literally contains
   another requirement's ID or title

Links are deduplicated by target ID (first occurrence wins) and never point
back at the requirement itself.
"""

from __future__ import annotations
from typing import List
import logging

from ..models import Requirement, Dependency
from ..text import build_index, tokenize_and_stem

logger = logging.getLogger(__name__)


SIMILARITY_THRESHOLD = 0.2


class DependencyLinker:
    """Attach a dependency list to every requirement."""

    @staticmethod
    def process(requirements: List[Requirement]) -> List[Requirement]:
        """
        Return copies of ``requirements`` with ``dependencies`` filled in.

        TF-IDF linking is quadratic in the number of requirements.
        """
        index = build_index([req.combined_text for req in requirements])
        linked = []

        for req_index, req in enumerate(requirements):
            dependencies: List[Dependency] = []

            query = " ".join(tokenize_and_stem(req.combined_text))
            for doc_index, measure in enumerate(index.measures(query)):
                if doc_index != req_index and measure > SIMILARITY_THRESHOLD:
                    other = requirements[doc_index]
                    dependencies.append(Dependency(
                        id=other.id,
                        title=other.title,
                        type="related",
                        similarity=round(measure, 2),
                    ))

            dependencies.extend(DependencyLinker._explicit_references(req, req_index, requirements))

            linked.append(req.model_copy(
                update={"dependencies": DependencyLinker._deduplicate(dependencies, req.id)}
            ))

        total = sum(len(req.dependencies) for req in linked)
        logger.debug(f"Linked {len(linked)} requirements with {total} dependencies")
        return linked

    @staticmethod
    def _explicit_references(
        req: Requirement,
        req_index: int,
        requirements: List[Requirement]
    ) -> List[Dependency]:
        """Dependencies from literal mentions of another requirement's ID or title."""
        text = req.combined_text
        references = []

        for other_index, other in enumerate(requirements):
            if other_index == req_index:
                continue
            if other.id in text:
                references.append(Dependency(id=other.id, title=other.title, type="depends-on"))
            if other.title in text:
                references.append(Dependency(id=other.id, title=other.title, type="references"))

        return references

    @staticmethod
    def _deduplicate(dependencies: List[Dependency], own_id: str) -> List[Dependency]:
        seen = {own_id}
        unique = []
        for dep in dependencies:
            if dep.id not in seen:
                seen.add(dep.id)
                unique.append(dep)
        return unique
