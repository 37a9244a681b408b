"""
Prompt Builder
System prompt selection and conversation formatting for Gemini.
"""
from typing import Iterable

from google.genai import types

from .types import ConversationTurn, Role


PLAN_START_TAG = "[PROJECT_PLAN]"
PLAN_END_TAG = "[/PROJECT_PLAN]"


BASE_SYSTEM_PROMPT = "You are a helpful AI assistant. Provide clear, concise, and accurate responses to user questions."


PROJECT_PLAN_INSTRUCTIONS = f"""CRITICAL: You have detected that this is a PROJECT PLAN request. You MUST format your response with the special project plan tags.

When the user asks for ANY type of plan, breakdown, roadmap, or step-by-step guide (including mobile app plans, development plans, implementation strategies, etc.), you MUST provide a comprehensive response in this EXACT format:

1. First, write your explanatory text, approach, and methodology OUTSIDE of any tags
2. Then, add the structured project plan data ONLY inside the special tags

MANDATORY FORMAT:
Your explanatory text about the approach and methodology goes here. This content should be visible to the user and explain your thinking, approach, and any important context.

{PLAN_START_TAG}
{{
  "workstreams": [
    {{
      "title": "Clear, descriptive workstream title",
      "description": "Detailed description of this workstream's purpose and scope",
      "deliverables": [
        {{
          "title": "Specific deliverable name",
          "description": "Clear description of what needs to be delivered, including acceptance criteria"
        }}
      ]
    }}
  ]
}}
{PLAN_END_TAG}

STRICT REQUIREMENTS:
- You MUST include the {PLAN_START_TAG} tags for ANY planning request
- Include 3-6 workstreams for comprehensive coverage
- Each workstream should have 2-6 deliverables
- Make titles specific and actionable
- Include technical details in descriptions
- Consider dependencies and logical sequencing
- Ensure JSON is valid and properly formatted
- Focus on practical, implementable tasks
- NEVER put explanatory text inside the {PLAN_START_TAG} tags - only valid JSON
- The JSON must be properly escaped and formatted
- Always include both opening {PLAN_START_TAG} and closing {PLAN_END_TAG} tags

FAILURE TO INCLUDE THE TAGS WILL RESULT IN INCORRECT RENDERING. This is a CRITICAL requirement."""


# Our roles -> Gemini's two-party role vocabulary
GEMINI_ROLES = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


class PromptBuilder:
    """Builds system instructions and Gemini-native conversation contents"""

    def __init__(
        self,
        base_prompt: str = BASE_SYSTEM_PROMPT,
        plan_instructions: str = PROJECT_PLAN_INSTRUCTIONS,
    ):
        self.base_prompt = base_prompt
        self.plan_instructions = plan_instructions

    def build_system_prompt(self, is_plan_request: bool) -> str:
        if is_plan_request:
            return f"{self.base_prompt}\n\n{self.plan_instructions}"
        return self.base_prompt

    def format_history(self, turns: Iterable[ConversationTurn]) -> list[types.Content]:
        """Map conversation turns to Gemini Content objects, preserving order"""
        return [
            types.Content(role=GEMINI_ROLES[turn.role], parts=[types.Part(text=turn.text)])
            for turn in turns
        ]

    def build_contents(self, history: Iterable[ConversationTurn], user_text: str) -> list[types.Content]:
        """Formatted history followed by the new user message"""
        contents = self.format_history(history)
        contents.append(types.Content(role="user", parts=[types.Part(text=user_text)]))
        return contents
