"""
Orchestration Types
Value objects passed between the chat handlers, the orchestrator and the provider.

Everything here is immutable: turns and plans are shared across concurrent
requests without locking.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Role(Enum):
    """Who authored a conversation turn"""
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """One message in a conversation"""
    role: Role
    text: str


class PlanFormatError(ValueError):
    """Raised when decoded JSON does not have the project plan shape"""
    pass


def _require_text(data: dict, key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise PlanFormatError(f"{where}.{key} must be a non-empty string")
    return value


def _require_list(data: dict, key: str, where: str) -> list:
    value = data.get(key)
    if not isinstance(value, list):
        raise PlanFormatError(f"{where}.{key} must be a list")
    return value


@dataclass(frozen=True)
class Deliverable:
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description}

    @classmethod
    def from_dict(cls, data: Any, where: str = "deliverable") -> "Deliverable":
        if not isinstance(data, dict):
            raise PlanFormatError(f"{where} must be an object")
        return cls(
            title=_require_text(data, "title", where),
            description=_require_text(data, "description", where),
        )


@dataclass(frozen=True)
class Workstream:
    title: str
    description: str
    deliverables: tuple[Deliverable, ...] = ()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "deliverables": [d.to_dict() for d in self.deliverables],
        }

    @classmethod
    def from_dict(cls, data: Any, where: str = "workstream") -> "Workstream":
        if not isinstance(data, dict):
            raise PlanFormatError(f"{where} must be an object")
        deliverables = _require_list(data, "deliverables", where)
        return cls(
            title=_require_text(data, "title", where),
            description=_require_text(data, "description", where),
            deliverables=tuple(
                Deliverable.from_dict(item, f"{where}.deliverables[{i}]")
                for i, item in enumerate(deliverables)
            ),
        )


@dataclass(frozen=True)
class ProjectPlan:
    """
    Structured plan extracted from a model reply.

    Field names match the JSON the model is asked to emit:
    workstreams -> title, description, deliverables -> title, description
    """
    workstreams: tuple[Workstream, ...] = ()

    def to_dict(self) -> dict:
        return {"workstreams": [w.to_dict() for w in self.workstreams]}

    @classmethod
    def from_dict(cls, data: Any) -> "ProjectPlan":
        """Build a plan from decoded JSON, raising PlanFormatError on any shape problem"""
        if not isinstance(data, dict):
            raise PlanFormatError("project plan must be a JSON object")
        workstreams = _require_list(data, "workstreams", "plan")
        return cls(
            workstreams=tuple(
                Workstream.from_dict(item, f"plan.workstreams[{i}]")
                for i, item in enumerate(workstreams)
            )
        )


@dataclass(frozen=True)
class LLMResponse:
    """Cleaned reply text plus the optional structured plan"""
    content: str
    plan: Optional[ProjectPlan] = None

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "projectPlan": self.plan.to_dict() if self.plan else None,
        }


class ProviderErrorKind(Enum):
    """Failure categories decoded at the provider boundary"""
    API = "api"
    NETWORK = "network"
    TIMEOUT = "timeout"
    EMPTY = "empty"


@dataclass(frozen=True)
class ProviderResult:
    """
    Outcome of one provider call.

    Exactly one of text / error is set. Providers never raise for
    remote failures; they return ProviderResult.failure(...) instead.
    """
    text: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ProviderErrorKind] = None
    metadata: dict = field(default_factory=dict, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str, **metadata) -> "ProviderResult":
        return cls(text=text, metadata=metadata)

    @classmethod
    def failure(cls, error: str, kind: ProviderErrorKind = ProviderErrorKind.API, **metadata) -> "ProviderResult":
        return cls(error=error, error_kind=kind, metadata=metadata)
