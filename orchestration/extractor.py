"""
Response Extractor
Pulls the tagged project plan block out of a model reply.

Extraction is fail-open: if the block cannot be parsed the reply is returned
untouched, so the user still sees everything the model wrote.
"""
import json
import re
from typing import Optional

from utils.logger import get_logger
from .prompts import PLAN_START_TAG, PLAN_END_TAG
from .types import LLMResponse, PlanFormatError, ProjectPlan

logger = get_logger(__name__)


class ResponseExtractor:
    """Finds, repairs and parses the first plan block in a reply"""

    def __init__(self, start_tag: str = PLAN_START_TAG, end_tag: str = PLAN_END_TAG):
        self.start_tag = start_tag
        self.end_tag = end_tag
        self.block_re = re.compile(
            f"{re.escape(start_tag)}(.*?){re.escape(end_tag)}",
            re.DOTALL,
        )

    def extract(self, raw_text: str) -> LLMResponse:
        match = self.block_re.search(raw_text)
        if not match:
            return LLMResponse(content=raw_text, plan=None)

        plan = self.parse_plan(match.group(1))
        if plan is None:
            logger.info("Keeping original content due to plan parse error")
            return LLMResponse(content=raw_text, plan=None)

        content = (raw_text[:match.start()] + raw_text[match.end():]).strip()
        logger.info(f"Extracted project plan with {len(plan.workstreams)} workstreams")
        return LLMResponse(content=content, plan=plan)

    def parse_plan(self, block: str) -> Optional[ProjectPlan]:
        """Parse the inner text of a plan block, None if it is not a valid plan"""
        json_text = self._strip_code_fences(block.strip())
        try:
            return ProjectPlan.from_dict(json.loads(json_text))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse project plan JSON: {e}")
        except PlanFormatError as e:
            logger.warning(f"Project plan has an unexpected shape: {e}")
        except (ValueError, RecursionError) as e:
            # Oversized integers, pathologically deep nesting
            logger.warning(f"Project plan JSON could not be decoded: {e!r:.200}")
        logger.debug(f"Raw plan block that failed to parse: {block[:500]}")
        return None

    @staticmethod
    def _strip_code_fences(text: str) -> str:
        # Models sometimes wrap the JSON in ```json ... ``` inside the tags
        if not text.startswith("```"):
            return text
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        return "\n".join(lines).strip()
