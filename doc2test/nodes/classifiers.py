"""
Priority and type classifiers.

Both classifiers are ordered rule tables of ``(pattern, result)`` pairs
evaluated top to bottom; the first matching rule wins.
"""

from __future__ import annotations
import re
from typing import List, Tuple

from ..models import PRIORITY_LEVELS

Rule = Tuple[re.Pattern, str]


# Word-bounded rules applied to requirement title + description
PRIORITY_RULES: List[Rule] = [
    (re.compile(r'\b(?:critical|highest|must|essential|mandatory|required|crucial|necessary)\b', re.I), "High"),
    (re.compile(r'\b(?:may|could|nice to have|optional|if possible|consider|future|enhancement)\b', re.I), "Low"),
]

# Substring rules applied to whole paragraphs on the lightweight path
PARAGRAPH_PRIORITY_RULES: List[Rule] = [
    (re.compile(r'critical|highest|must|essential|mandatory|required|crucial|necessary', re.I), "High"),
    (re.compile(r'should|important|significant|moderate|recommended', re.I), "Medium"),
    (re.compile(r'may|could|nice to have|optional|if possible|consider|future|enhancement', re.I), "Low"),
]

TYPE_RULES: List[Rule] = [
    (re.compile(r'\b(?:function|feature|capability|ability|operation|action|process)\b', re.I),
     "Functional"),
    (re.compile(r'\b(?:performance|speed|response time|latency|throughput|capacity|resource|memory|cpu|fast|slow)\b', re.I),
     "Performance"),
    (re.compile(r'\b(?:security|authentication|authorization|encrypt|hash|password|access control|permiss|role|sensitive|confidential)\b', re.I),
     "Security"),
    (re.compile(r'\b(?:usability|user interface|ui|ux|accessibility|user experience|ease of use|intuitive|learn|user-friendly)\b', re.I),
     "Usability"),
    (re.compile(r'\b(?:reliability|availability|maintainability|fault tolerance|recovery|backup|resilience|robust)\b', re.I),
     "Reliability"),
]

DEFAULT_PRIORITY = "Medium"
DEFAULT_TYPE = "Functional"


def apply_rules(rules: List[Rule], text: str, default: str) -> str:
    """Return the result of the first rule whose pattern matches ``text``."""
    for pattern, result in rules:
        if pattern.search(text):
            return result
    return default


def determine_priority(title: str, description: str) -> str:
    """High/Low/Medium from keywords in the title and description."""
    return apply_rules(PRIORITY_RULES, f"{title} {description}".lower(), DEFAULT_PRIORITY)


def determine_paragraph_priority(paragraph: str) -> str:
    """Priority of a whole paragraph, used by the lightweight extractor."""
    return apply_rules(PARAGRAPH_PRIORITY_RULES, paragraph.lower(), DEFAULT_PRIORITY)


def determine_type(title: str, description: str) -> str:
    """Requirement category; first matching category in precedence order wins."""
    return apply_rules(TYPE_RULES, f"{title} {description}".lower(), DEFAULT_TYPE)


def shift_priority(priority: str, adjustment: int) -> str:
    """
    Move a priority up (+1) or down (-1), clamped to High and Low.

    Unknown priorities are returned unchanged.
    """
    if priority not in PRIORITY_LEVELS:
        return priority
    index = PRIORITY_LEVELS.index(priority) + adjustment
    index = max(0, min(len(PRIORITY_LEVELS) - 1, index))
    return PRIORITY_LEVELS[index]

