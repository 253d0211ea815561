"""
AutomationAdvisor Node (Deterministic)

Tags each generated test case with an automation-suitability label and the
rationale behind it. The test case is otherwise left untouched.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Tuple
import logging

from ..models import TestCase

logger = logging.getLogger(__name__)


CONDITIONAL_KEYWORDS = ('if', 'when', 'case', 'depending', 'based on', 'condition')
USER_INTERACTION_KEYWORDS = ('click', 'select', 'enter', 'input', 'type', 'drag', 'drop')
VISUAL_VERIFICATION_KEYWORDS = ('appears', 'visual', 'layout', 'look', 'style', 'color', 'position')
DATA_DRIVEN_KEYWORDS = ('for each', 'multiple', 'various', 'different', 'data set')

MANUAL_TESTING = "Manual Testing Recommended"
VISUAL_AUTOMATION = "Visual Automation Recommended"
AUTOMATION_RECOMMENDED = "Automation Recommended"
UI_AUTOMATION = "UI Automation Recommended"
DATA_DRIVEN_AUTOMATION = "Data-Driven Automation Recommended"
COMPLEX_AUTOMATION = "Complex Automation Required"
AUTOMATION_CANDIDATE = "Automation Candidate"

RATIONALES = {
    MANUAL_TESTING: "Test requires visual verification and complex conditional logic",
    VISUAL_AUTOMATION: "Test requires visual verification, consider tools with image comparison",
    AUTOMATION_RECOMMENDED: "Simple test case suitable for automation",
    UI_AUTOMATION: "Test involves user interaction with straightforward flow",
    DATA_DRIVEN_AUTOMATION: "Test involves multiple data scenarios",
    COMPLEX_AUTOMATION: "Test has many steps, consider breaking down or automating in sections",
    AUTOMATION_CANDIDATE: "Standard complexity, suitable for automation",
}


@dataclass
class ComplexityFactors:
    """Signals read from a test case's steps, expected result and description."""
    steps_count: int = 0
    has_conditional_logic: bool = False
    has_user_interaction: bool = False
    has_visual_verification: bool = False
    is_data_driven: bool = False


# Evaluated in order; the first predicate that holds decides the label
RECOMMENDATION_RULES: List[Tuple[Callable[[ComplexityFactors], bool], str]] = [
    (lambda f: f.has_visual_verification and f.has_conditional_logic, MANUAL_TESTING),
    (lambda f: f.has_visual_verification, VISUAL_AUTOMATION),
    (lambda f: f.steps_count <= 3 and not f.has_conditional_logic, AUTOMATION_RECOMMENDED),
    (lambda f: f.has_user_interaction and not f.has_conditional_logic, UI_AUTOMATION),
    (lambda f: f.is_data_driven, DATA_DRIVEN_AUTOMATION),
    (lambda f: f.steps_count > 10, COMPLEX_AUTOMATION),
]


def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


class AutomationAdvisor:
    """Recommend how (or whether) to automate a test case."""

    @staticmethod
    def process(test_cases: List[TestCase]) -> List[TestCase]:
        """Return copies of ``test_cases`` carrying the recommendation and its rationale."""
        tagged = []
        for test_case in test_cases:
            label = AutomationAdvisor.recommend(test_case)
            tagged.append(test_case.model_copy(update={
                "automation_recommendation": label,
                "automation_rationale": AutomationAdvisor.rationale(label),
            }))
        return tagged

    @staticmethod
    def analyze(test_case: TestCase) -> ComplexityFactors:
        """Compute the complexity factors; keyword checks are case-insensitive substrings."""
        factors = ComplexityFactors()
        if not test_case.steps:
            return factors

        steps = test_case.steps.lower()
        expected = (test_case.expected_result or "").lower()
        description = (test_case.description or "").lower()

        factors.steps_count = len(test_case.step_list)
        factors.has_conditional_logic = _contains_any(steps, CONDITIONAL_KEYWORDS)
        factors.has_user_interaction = _contains_any(steps, USER_INTERACTION_KEYWORDS)
        factors.has_visual_verification = (
            _contains_any(steps, VISUAL_VERIFICATION_KEYWORDS)
            or _contains_any(expected, VISUAL_VERIFICATION_KEYWORDS)
        )
        factors.is_data_driven = (
            _contains_any(steps, DATA_DRIVEN_KEYWORDS)
            or _contains_any(description, DATA_DRIVEN_KEYWORDS)
        )
        return factors

    @staticmethod
    def recommend(test_case: TestCase) -> str:
        return AutomationAdvisor.decide(AutomationAdvisor.analyze(test_case))

    @staticmethod
    def decide(factors: ComplexityFactors) -> str:
        for predicate, label in RECOMMENDATION_RULES:
            if predicate(factors):
                return label
        return AUTOMATION_CANDIDATE

    @staticmethod
    def rationale(label: str) -> str:
        """Explanation shown next to a recommendation label."""
        return RATIONALES[label]
