"""
Plan Request Classifier
Determines if a user message is asking for a project plan / breakdown.

The result only selects which system prompt is sent, so the classifier is
deliberately permissive: a false positive costs a longer prompt, a false
negative costs the structured plan.
"""
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from utils.logger import get_logger

logger = get_logger(__name__)


# Planning vocabulary, matched as case-insensitive substrings
PLAN_KEYWORDS = (
    "project plan", "project planning", "work breakdown", "wbs",
    "workstream", "deliverable", "milestone", "roadmap",
    "implementation plan", "development plan", "task breakdown",
    "sprint planning", "agile planning", "scrum planning",
    "timeline", "schedule", "phases", "iterations",
    "requirements breakdown", "feature breakdown",
    "technical roadmap", "product roadmap",
    "architecture plan", "design plan",
    "deployment plan", "release plan",
    "how to build", "how to implement", "how to develop",
    "step by step", "breakdown", "organize tasks",
    "plan out", "structure the work", "divide the work",
    "plan to", "create a plan", "make a plan", "planning",
    "mobile app plan", "app development plan", "build an app",
    "create an app", "develop an app", "app creation",
    "concise plan", "detailed plan", "comprehensive plan",
)

# Structural patterns
PLAN_PATTERNS = (
    r"plan\s+to\s+\w+",                        # "plan to create", "plan to build"
    r"\w+\s+plan",                             # "mobile plan", "development plan"
    r"^\s*plan\s+\w+",                         # imperative: "Plan a product launch"
    r"how\s+to\s+(build|create|make|develop)",
    r"step[\s-]*by[\s-]*step",                 # "step by step", "step-by-step"
    r"phase\s*\d+",                            # "phase 1", "phase2"
    r"\d+\.\s*\w+",                            # numbered lists like "1. Planning"
)


@dataclass(frozen=True)
class PlanClassification:
    """Result of classifying a user message"""
    is_plan_request: bool
    matched_keyword: Optional[str] = None
    matched_pattern: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "is_plan_request": self.is_plan_request,
            "matched_keyword": self.matched_keyword,
            "matched_pattern": self.matched_pattern,
        }


class PlanRequestClassifier:
    """
    Keyword + pattern classifier for plan requests.

    The tables are plain data so they can be swapped (e.g. per locale)
    without touching the orchestrator.
    """

    def __init__(
        self,
        keywords: Sequence[str] = PLAN_KEYWORDS,
        patterns: Sequence[str] = PLAN_PATTERNS,
    ):
        self.keywords = tuple(k.lower() for k in keywords)
        self.patterns = tuple(re.compile(p, re.IGNORECASE) for p in patterns)

    def classify(self, message: str) -> PlanClassification:
        """Classify a message, reporting the first keyword and pattern that matched"""
        message_lower = message.lower()

        matched_keyword = next((k for k in self.keywords if k in message_lower), None)
        matched_pattern = next((p.pattern for p in self.patterns if p.search(message)), None)

        return PlanClassification(
            is_plan_request=matched_keyword is not None or matched_pattern is not None,
            matched_keyword=matched_keyword,
            matched_pattern=matched_pattern,
        )

    def is_plan_request(self, message: str) -> bool:
        return self.classify(message).is_plan_request


_default_classifier = PlanRequestClassifier()


def is_plan_request(message: str) -> bool:
    """Classify with the default keyword and pattern tables"""
    return _default_classifier.is_plan_request(message)
