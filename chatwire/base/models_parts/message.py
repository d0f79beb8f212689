"""
Message model shared by requests and assembled responses.

One dataclass tagged by ``role`` stands in for the four wire variants:

- ``system``: text content.
- ``user``: text content, or an ordered sequence of :class:`ContentPart`.
- ``assistant``: optional text content and/or an ordered sequence of
  :class:`ToolCall`; at least one of the two is present.
- ``tool``: text content answering the call named by ``tool_call_id``.

The ``system()``/``user()``/``assistant()``/``tool()`` constructors are the
intended way to build instances; ``__post_init__`` enforces the per-role
shape either way.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

from .content_part import ContentPart
from .tool_call import ToolCall


Role = Literal["system", "user", "assistant", "tool"]

MessageContent = Union[str, Tuple[ContentPart, ...]]


@dataclass(frozen=True)
class Message:
    """A chat message in canonical form.

    Attributes:
        role: Author role.
        content: Text, a tuple of content parts (user only), or ``None``
            (assistant messages that only carry tool calls).
        tool_calls: Tool calls issued by an assistant message, in order.
        tool_call_id: Id of the call a ``tool`` message responds to.

    Raises:
        ValueError: When the fields do not fit the role.
    """

    role: Role
    content: Optional[MessageContent] = None
    tool_calls: Tuple[ToolCall, ...] = ()
    tool_call_id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.content, list):
            object.__setattr__(self, "content", tuple(self.content))
        if isinstance(self.tool_calls, list):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))
        role = self.role
        if role not in ("system", "user", "assistant", "tool"):
            raise ValueError(f"unsupported message role: {role!r}")
        if role != "assistant" and self.tool_calls:
            raise ValueError(f"{role} messages cannot carry tool calls")
        if role != "tool" and self.tool_call_id is not None:
            raise ValueError("only tool messages carry tool_call_id")
        if isinstance(self.content, tuple) and role != "user":
            raise ValueError("content parts are only accepted on user messages")
        if role in ("system", "tool") and not isinstance(self.content, str):
            raise ValueError(f"{role} messages require text content")
        if role == "user" and self.content is None:
            raise ValueError("user messages require content")
        if role == "tool" and not self.tool_call_id:
            raise ValueError("tool messages require tool_call_id")
        if role == "assistant" and self.content is None and not self.tool_calls:
            raise ValueError("assistant messages require content or tool_calls")

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: Union[str, Sequence[ContentPart]]) -> "Message":
        return cls(role="user", content=content if isinstance(content, str) else tuple(content))

    @classmethod
    def assistant(cls, content: Optional[str] = None, tool_calls: Sequence[ToolCall] = ()) -> "Message":
        return cls(role="assistant", content=content, tool_calls=tuple(tool_calls))

    @classmethod
    def tool(cls, tool_call_id: str, content: str) -> "Message":
        return cls(role="tool", content=content, tool_call_id=tool_call_id)

    def is_structured(self) -> bool:
        """Return True if the content is a sequence of parts."""
        return isinstance(self.content, tuple)

    def text(self) -> str:
        """Flatten the content to text (non-text parts become ``[type]``)."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(p.text if p.text is not None else f"[{p.type}]" for p in self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI wire shape of this message."""
        data: Dict[str, Any] = {"role": self.role}
        if isinstance(self.content, tuple):
            data["content"] = [p.to_dict() for p in self.content]
        elif self.content is not None:
            data["content"] = self.content
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data


def messages_to_dicts(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    return [m.to_dict() for m in messages]


__all__ = [
    "Message",
    "MessageContent",
    "Role",
    "messages_to_dicts",
]
