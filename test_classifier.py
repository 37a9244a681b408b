"""
Tests for the plan request classifier
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from orchestration.classifier import PlanRequestClassifier, is_plan_request


@pytest.mark.parametrize("message", [
    "Give me a step by step plan to launch a product",
    "Plan a mobile app launch",
    "Can you build a roadmap for Q3?",
    "How to build a REST API in Go",
    "walk me through it step-by-step",
    "What goes into phase 2?",
    "1. Research\n2. Design",
    "We need a work breakdown for the migration",
    "I want a marketing plan",
])
def test_detects_plan_requests(message):
    assert is_plan_request(message) is True


@pytest.mark.parametrize("message", [
    "What's the weather today?",
    "Tell me a joke",
    "Who wrote Hamlet?",
    "",
    "   \n\t",
])
def test_ignores_conversational_messages(message):
    assert is_plan_request(message) is False


def test_keyword_match_is_case_insensitive():
    assert is_plan_request("SHOW ME THE PRODUCT ROADMAP") is True


def test_classify_reports_what_matched():
    result = PlanRequestClassifier().classify("Share the release plan")

    assert result.is_plan_request
    assert result.matched_keyword == "release plan"
    assert result.matched_pattern is not None


def test_tables_are_replaceable():
    classifier = PlanRequestClassifier(keywords=["hoja de ruta"], patterns=[r"plan\s+de\s+\w+"])

    assert classifier.is_plan_request("Necesito una hoja de ruta")
    assert classifier.is_plan_request("un plan de proyecto")
    assert not classifier.is_plan_request("Give me a project plan")
