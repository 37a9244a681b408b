"""
Tests for project plan extraction from model replies
"""
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from orchestration.extractor import ResponseExtractor
from orchestration.types import ProjectPlan


PLAN_DATA = {
    "workstreams": [
        {
            "title": "Market Research",
            "description": "Understand the target audience",
            "deliverables": [
                {"title": "Survey", "description": "Survey 100 potential users"},
                {"title": "Competitor report", "description": "Compare five competitors"},
            ],
        },
        {
            "title": "Launch",
            "description": "Ship to the app stores",
            "deliverables": [
                {"title": "Store listing", "description": "Screenshots and copy"},
                {"title": "Press kit", "description": "Logos and a press release"},
            ],
        },
    ]
}


def tagged(body: str) -> str:
    return f"[PROJECT_PLAN]\n{body}\n[/PROJECT_PLAN]"


def test_reply_without_block_is_unchanged():
    raw = "Here is some advice.\n\nNo plan needed."
    result = ResponseExtractor().extract(raw)

    assert result.content == raw
    assert result.plan is None


def test_valid_block_is_removed_and_parsed():
    block = tagged(json.dumps(PLAN_DATA, indent=2))
    raw = f"Here's my approach.\n\n{block}\n\nGood luck!"
    result = ResponseExtractor().extract(raw)

    assert result.content == raw.replace(block, "").strip()
    assert result.content.startswith("Here's my approach.")
    assert result.content.endswith("Good luck!")
    assert "[PROJECT_PLAN]" not in result.content
    assert result.plan is not None
    assert result.plan.to_dict() == PLAN_DATA
    assert result.plan.workstreams[0].deliverables[1].title == "Competitor report"


def test_block_at_end_leaves_trimmed_prose():
    raw = f"Intro text   \n{tagged(json.dumps(PLAN_DATA))}\n  "
    result = ResponseExtractor().extract(raw)

    assert result.content == "Intro text"
    assert result.plan.to_dict() == PLAN_DATA


def test_invalid_json_keeps_original_content():
    broken = '{"workstreams": [ {"title": '
    raw = f"Intro\n{tagged(broken)}\nOutro"
    result = ResponseExtractor().extract(raw)

    assert result.content == raw
    assert result.plan is None


def test_wrong_shape_keeps_original_content():
    bad = {"workstreams": [{"title": "Only a title"}]}
    raw = f"Intro\n{tagged(json.dumps(bad))}"
    result = ResponseExtractor().extract(raw)

    assert result.content == raw
    assert result.plan is None


def test_empty_strings_are_rejected():
    bad = {"workstreams": [{"title": "", "description": "x", "deliverables": []}]}
    result = ResponseExtractor().extract(tagged(json.dumps(bad)))

    assert result.plan is None


def test_code_fenced_json_is_repaired():
    body = "```json\n" + json.dumps(PLAN_DATA, indent=2) + "\n```"
    result = ResponseExtractor().extract(f"Plan below.\n{tagged(body)}")

    assert result.content == "Plan below."
    assert result.plan.to_dict() == PLAN_DATA


def test_only_first_block_is_processed():
    first = tagged(json.dumps(PLAN_DATA))
    second = tagged(json.dumps({"workstreams": []}))
    result = ResponseExtractor().extract(f"A\n{first}\nB\n{second}")

    assert result.plan.to_dict() == PLAN_DATA
    assert result.content.startswith("A\n")
    assert second in result.content


def test_plan_round_trips_through_from_dict():
    plan = ProjectPlan.from_dict(PLAN_DATA)

    assert len(plan.workstreams) == 2
    assert ProjectPlan.from_dict(plan.to_dict()) == plan


def test_oversized_integer_keeps_original_content():
    raw = 'Intro\n[PROJECT_PLAN]{"workstreams": ' + "9" * 5000 + "}[/PROJECT_PLAN]"
    result = ResponseExtractor().extract(raw)

    assert result.content == raw
    assert result.plan is None


def test_deeply_nested_json_keeps_original_content():
    raw = "Intro\n[PROJECT_PLAN]" + "[" * 100000 + "[/PROJECT_PLAN]"
    result = ResponseExtractor().extract(raw)

    assert result.content == raw
    assert result.plan is None
