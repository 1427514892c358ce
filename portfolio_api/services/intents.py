"""
Rule-based intent classification and keyword extraction for the assistant.

Public API
----------
classify_intent(message, portfolio=PORTFOLIO)   -> Intent
extract_keywords(message, portfolio=PORTFOLIO)  -> List[str]
analyze_intent(message, portfolio=PORTFOLIO)    -> IntentResult

Classification is first-match-wins over an ordered list of predicates; there is
no scoring and no tie-breaking beyond that order.
"""
from __future__ import annotations

import dataclasses
import enum
import re
from typing import Callable, List, Tuple

from portfolio_api.services.portfolio_data import PORTFOLIO, Portfolio
from portfolio_api.utils.helpers import tokenize, unique_in_order


class Intent(str, enum.Enum):
    SKILLS_QUESTION = "skills_question"
    EXPERIENCE_QUESTION = "experience_question"
    PROJECT_DETAILS = "project_details"
    PROJECT_INQUIRY = "project_inquiry"
    SKILL_ANALYSIS = "skill_analysis"
    PROJECT_RECOMMENDATION = "project_recommendation"
    GENERAL_QUESTION = "general_question"


@dataclasses.dataclass
class IntentResult:
    intent: Intent
    keywords: List[str]


TECH_KEYWORDS: Tuple[str, ...] = (
    "angular",
    "react",
    "node",
    "python",
    "javascript",
    "typescript",
    "firebase",
    "ai",
    "ml",
)

_SKILLS_QUESTION = re.compile(
    r"(what\s+skills|your\s+skills|skills\s+do\s+you\s+have|list\s+skills)", re.IGNORECASE
)
_EXPERIENCE_QUESTION = re.compile(
    r"(how\s+long|years\s+of\s+experience|experience\s+do\s+you\s+have|total\s+experience)",
    re.IGNORECASE,
)
_DETAILS_REQUEST = re.compile(r"tell\s+me\s+about\s+|details\s+about\s+")

# Category keywords, checked in order after the specific predicates.
# Recommendation phrasing goes first so "recommend a project" is not swallowed
# by the generic "project" keyword.
_CATEGORY_KEYWORDS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.PROJECT_RECOMMENDATION, ("recommend", "suggest", "what should")),
    (Intent.PROJECT_INQUIRY, ("project", "work", "portfolio")),
    (Intent.SKILL_ANALYSIS, ("skill", "learn", "improve")),
)


def title_tokens(title: str, min_length: int = 0) -> List[str]:
    """Tokens of a project title longer than *min_length* characters."""
    return [token for token in tokenize(title) if len(token) > min_length]


def keyword_vocabulary(portfolio: Portfolio = PORTFOLIO) -> List[str]:
    """Fixed technology terms followed by tokens derived from project titles."""
    project_tokens = [
        token
        for project in portfolio.projects
        for token in title_tokens(project.title, min_length=2)
    ]
    return unique_in_order(list(TECH_KEYWORDS) + project_tokens)


def extract_keywords(message: str, portfolio: Portfolio = PORTFOLIO) -> List[str]:
    """Vocabulary terms occurring in the lower-cased message, in vocabulary order."""
    lower = (message or "").lower()
    return [keyword for keyword in keyword_vocabulary(portfolio) if keyword in lower]


def _mentions_project(lower: str, portfolio: Portfolio) -> bool:
    return any(project.title.lower() in lower for project in portfolio.projects)


def classify_intent(message: str, portfolio: Portfolio = PORTFOLIO) -> Intent:
    """Bucket free text into one :class:`Intent`; unmatched input is a general question."""
    lower = (message or "").lower()

    predicates: List[Tuple[Intent, Callable[[str], bool]]] = [
        (Intent.SKILLS_QUESTION, lambda text: bool(_SKILLS_QUESTION.search(text))),
        (Intent.EXPERIENCE_QUESTION, lambda text: bool(_EXPERIENCE_QUESTION.search(text))),
        (
            Intent.PROJECT_DETAILS,
            lambda text: _mentions_project(text, portfolio) or bool(_DETAILS_REQUEST.search(text)),
        ),
    ]
    for intent, keywords in _CATEGORY_KEYWORDS:
        predicates.append(
            (intent, lambda text, keywords=keywords: any(k in text for k in keywords))
        )

    for intent, matches in predicates:
        if matches(lower):
            return intent
    return Intent.GENERAL_QUESTION


def analyze_intent(message: str, portfolio: Portfolio = PORTFOLIO) -> IntentResult:
    """Classify *message* and extract its keywords in one step."""
    return IntentResult(
        intent=classify_intent(message, portfolio),
        keywords=extract_keywords(message, portfolio),
    )
