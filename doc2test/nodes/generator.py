"""
TestCaseGenerator Node (Deterministic)

Synthesizes up to three candidate test cases per requirement:

1. Functional test (always)
2. Edge-case test, when the requirement mentions inputs or limits
3. Negative test, when the requirement mentions validation or inputs

Steps and expected results are picked from ordered keyword tables matched
against the requirement description. Edge-case and negative tests sit one
priority level below the functional test.
"""

from __future__ import annotations
import re
from typing import List, Optional, Tuple
import logging

from ..models import Requirement, TestCase
from .classifiers import shift_priority

logger = logging.getLogger(__name__)


INPUT_KEYWORDS = re.compile(r'input|enter|field|form|value|data|upload|select', re.I)
LIMIT_KEYWORDS = re.compile(r'maximum|minimum|limit|threshold|capacity|boundary|at least|at most', re.I)
VALIDATION_KEYWORDS = re.compile(r'valid|invalid|check|verif|confirm|authent|authoriz|permiss|access', re.I)
LOGIN_KEYWORDS = re.compile(r'login|authenticate|sign in', re.I)

SETUP_STEP = "Set up test environment and prerequisites"

# Action families in precedence order; the first match supplies the steps
ACTION_STEPS: List[Tuple[re.Pattern, List[str]]] = [
    (re.compile(r'create|add|new|insert', re.I), [
        "Navigate to the relevant section",
        "Create a new item with required information",
        "Submit or save the information",
    ]),
    (re.compile(r'edit|update|modify|change', re.I), [
        "Navigate to the relevant section",
        "Select an existing item to modify",
        "Update the information",
        "Save the changes",
    ]),
    (re.compile(r'delete|remove', re.I), [
        "Navigate to the relevant section",
        "Select an existing item to delete",
        "Confirm deletion",
    ]),
    (re.compile(r'search|find|filter', re.I), [
        "Navigate to the search function",
        "Enter search criteria",
        "Execute the search",
    ]),
    (re.compile(r'display|show|view|present', re.I), [
        "Navigate to the relevant section",
        "Verify the information is displayed correctly",
    ]),
    (re.compile(r'export|download|report', re.I), [
        "Navigate to the export/report section",
        "Select export parameters or report type",
        "Execute the export/report generation",
    ]),
    (re.compile(r'upload|import', re.I), [
        "Navigate to the upload/import function",
        "Select a valid file to upload/import",
        "Execute the upload/import process",
    ]),
]
GENERIC_ACTION_STEPS = [
    "Navigate to the relevant section",
    "Perform the required action",
    "Verify the results",
]
VERIFICATION_STEPS = [
    "Verify that the action is completed successfully",
    "Verify that all related data is updated correctly",
]

EXPECTED_RESULTS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'create|add|new|insert', re.I),
     "New item is created successfully and appears in the system with all information correctly saved"),
    (re.compile(r'edit|update|modify|change', re.I),
     "Information is updated successfully and changes are correctly saved in the system"),
    (re.compile(r'delete|remove', re.I),
     "Item is successfully deleted and no longer appears in the system"),
    (re.compile(r'search|find|filter', re.I),
     "Search results are displayed correctly and match the search criteria"),
    (re.compile(r'display|show|view|present', re.I),
     "Information is displayed correctly and completely according to requirements"),
    (re.compile(r'export|download|report', re.I),
     "File is exported/downloaded successfully and contains the correct information"),
    (re.compile(r'upload|import', re.I),
     "File is uploaded/imported successfully and data is correctly processed"),
    (LOGIN_KEYWORDS,
     "User is successfully authenticated and granted appropriate access to the system"),
]
DEFAULT_EXPECTED_RESULT = "System performs the required action successfully and meets the specified requirement"

EDGE_CASE_STEPS: List[Tuple[re.Pattern, List[str]]] = [
    (re.compile(r'maximum|limit|capacity|threshold', re.I), [
        "Identify the maximum limit specified in the requirement",
        "Prepare test data at exactly the maximum limit",
        "Execute the operation with maximum limit data",
        "Verify system behavior",
        "Prepare test data slightly exceeding the maximum limit",
        "Execute the operation with data exceeding the limit",
    ]),
    (re.compile(r'minimum', re.I), [
        "Identify the minimum value specified in the requirement",
        "Prepare test data at exactly the minimum value",
        "Execute the operation with minimum value data",
        "Verify system behavior",
        "Prepare test data slightly below the minimum value",
        "Execute the operation with data below the minimum",
    ]),
]
GENERIC_EDGE_CASE_STEPS = [
    "Identify boundary conditions in the requirement",
    "Prepare test data at the boundary condition",
    "Execute the operation with boundary condition data",
    "Verify system behavior",
    "Prepare test data beyond the boundary condition",
    "Execute the operation with data beyond the boundary",
]
EDGE_CASE_EXPECTED_RESULT = "System handles edge cases gracefully without errors or unexpected behavior"

NEGATIVE_STEPS = [
    SETUP_STEP,
    "Identify expected valid input or action",
    "Prepare invalid or unauthorized input/action",
    "Attempt to execute the action with invalid data",
    "Verify the system rejects the input and shows appropriate error messages",
]
NEGATIVE_EXPECTED_RESULT = "System rejects invalid input or unauthorized actions with appropriate error messages"


def number_steps(steps: List[str]) -> str:
    """Render steps as a newline-delimited, 1-based numbered procedure."""
    return "\n".join(f"{i}. {step}" for i, step in enumerate(steps, 1))


def _pick(table: List[Tuple[re.Pattern, object]], text: str, default):
    for pattern, value in table:
        if pattern.search(text):
            return value
    return default


class TestCaseGenerator:
    """Generate functional, edge-case and negative tests for requirements."""
    __test__ = False  # not a pytest test class

    @staticmethod
    def process(requirements: List[Requirement]) -> List[TestCase]:
        """Generate test cases for every requirement, grouped per requirement."""
        test_cases: List[TestCase] = []

        for requirement in requirements:
            test_cases.append(TestCaseGenerator.functional_test(requirement))

            edge_case = TestCaseGenerator.edge_case_test(requirement)
            if edge_case:
                test_cases.append(edge_case)

            negative = TestCaseGenerator.negative_test(requirement)
            if negative:
                test_cases.append(negative)

        logger.debug(f"Generated {len(test_cases)} test cases for {len(requirements)} requirements")
        return test_cases

    @staticmethod
    def functional_test(requirement: Requirement) -> TestCase:
        return TestCase(
            title=f"Verify {requirement.title}",
            description=f"Test to verify that the system correctly implements: {requirement.description}",
            priority=requirement.priority,
            steps=TestCaseGenerator.functional_steps(requirement),
            expected_result=TestCaseGenerator.expected_result(requirement),
            requirement_id=requirement.id,
            test_type="functional",
        )

    @staticmethod
    def edge_case_test(requirement: Requirement) -> Optional[TestCase]:
        description = requirement.description
        if not (INPUT_KEYWORDS.search(description) or LIMIT_KEYWORDS.search(description)):
            return None

        return TestCase(
            title=f"Edge Case Test: {requirement.title}",
            description=f"Test to verify system behavior at boundary conditions for: {description}",
            priority=shift_priority(requirement.priority, -1),
            steps=TestCaseGenerator.edge_case_steps(requirement),
            expected_result=EDGE_CASE_EXPECTED_RESULT,
            requirement_id=requirement.id,
            test_type="edge-case",
        )

    @staticmethod
    def negative_test(requirement: Requirement) -> Optional[TestCase]:
        description = requirement.description
        if not (VALIDATION_KEYWORDS.search(description) or INPUT_KEYWORDS.search(description)):
            return None

        return TestCase(
            title=f"Negative Test: {requirement.title}",
            description=(
                "Test to verify system behavior with invalid inputs or unauthorized "
                f"actions for: {description}"
            ),
            priority=shift_priority(requirement.priority, -1),
            steps=number_steps(NEGATIVE_STEPS),
            expected_result=NEGATIVE_EXPECTED_RESULT,
            requirement_id=requirement.id,
            test_type="negative",
        )

    @staticmethod
    def functional_steps(requirement: Requirement) -> str:
        """
        Setup, optional login, one action family, then two verification steps.

        The login step is added on top of whichever action family matches.
        """
        description = requirement.description.lower()

        steps = [SETUP_STEP]
        if LOGIN_KEYWORDS.search(description):
            steps.append("Login to the system with valid credentials")
        steps.extend(_pick(ACTION_STEPS, description, GENERIC_ACTION_STEPS))
        steps.extend(VERIFICATION_STEPS)

        return number_steps(steps)

    @staticmethod
    def edge_case_steps(requirement: Requirement) -> str:
        description = requirement.description.lower()

        steps = [SETUP_STEP]
        steps.extend(_pick(EDGE_CASE_STEPS, description, GENERIC_EDGE_CASE_STEPS))
        steps.append("Verify system response at edge cases")

        return number_steps(steps)

    @staticmethod
    def expected_result(requirement: Requirement) -> str:
        return _pick(EXPECTED_RESULTS, requirement.description.lower(), DEFAULT_EXPECTED_RESULT)
