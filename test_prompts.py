"""
Tests for system prompt selection and history formatting
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from orchestration.prompts import BASE_SYSTEM_PROMPT, PLAN_END_TAG, PLAN_START_TAG, PromptBuilder
from orchestration.types import ConversationTurn, Role


def test_plain_prompt_is_baseline():
    prompt = PromptBuilder().build_system_prompt(False)

    assert prompt == BASE_SYSTEM_PROMPT
    assert PLAN_START_TAG not in prompt


def test_plan_prompt_mandates_tagged_block():
    prompt = PromptBuilder().build_system_prompt(True)

    assert prompt.startswith(BASE_SYSTEM_PROMPT)
    assert PLAN_START_TAG in prompt
    assert PLAN_END_TAG in prompt
    assert "3-6 workstreams" in prompt
    assert "2-6 deliverables" in prompt
    for key in ('"workstreams"', '"title"', '"description"', '"deliverables"'):
        assert key in prompt


def test_history_maps_roles_to_gemini_vocabulary():
    turns = [
        ConversationTurn(Role.USER, "Hi"),
        ConversationTurn(Role.ASSISTANT, "Hello! How can I help?"),
        ConversationTurn(Role.USER, "Plan my week"),
    ]

    contents = PromptBuilder().format_history(turns)

    assert [c.role for c in contents] == ["user", "model", "user"]
    assert [c.parts[0].text for c in contents] == ["Hi", "Hello! How can I help?", "Plan my week"]


def test_empty_history_formats_to_empty_list():
    assert PromptBuilder().format_history([]) == []


def test_build_contents_appends_user_message():
    history = [ConversationTurn(Role.ASSISTANT, "Earlier reply")]

    contents = PromptBuilder().build_contents(history, "Next question")

    assert len(contents) == 2
    assert contents[-1].role == "user"
    assert contents[-1].parts[0].text == "Next question"
