# src/typedturn/messages.py
"""Chat messages exchanged with a provider."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

ROLE_USER = "user"
ROLE_SYSTEM = "system"
ROLE_ASSISTANT = "assistant"

ROLES = (ROLE_USER, ROLE_SYSTEM, ROLE_ASSISTANT)


class Message(BaseModel):
    """A single chat message.

    ``reasoning_content`` holds the provider's separate reasoning text when
    thinking mode is enabled; it is never sent back in requests.
    """

    model_config = ConfigDict(frozen=True)

    role: str
    content: str
    reasoning_content: Optional[str] = None

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: str) -> str:
        if value not in ROLES:
            raise ValueError(f"Invalid role: {value}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire format (role and content only)."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=ROLE_USER, content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=ROLE_SYSTEM, content=content)

    @classmethod
    def assistant(cls, content: str, reasoning_content: Optional[str] = None) -> "Message":
        return cls(role=ROLE_ASSISTANT, content=content, reasoning_content=reasoning_content)


class MessageCollection:
    """Ordered list of ``Message`` objects."""

    def __init__(self, messages: Optional[Iterable[Message]] = None):
        self._items: List[Message] = []
        for message in messages or ():
            self.push(message)

    @staticmethod
    def _check(message: Any) -> Message:
        if not isinstance(message, Message):
            raise TypeError(
                "MessageCollection can only contain Message objects. "
                f"Got: {type(message).__name__}"
            )
        return message

    def push(self, message: Message) -> "MessageCollection":
        self._items.append(self._check(message))
        return self

    def prepend(self, message: Message) -> "MessageCollection":
        self._items.insert(0, self._check(message))
        return self

    def first(self) -> Optional[Message]:
        return self._items[0] if self._items else None

    def last(self) -> Optional[Message]:
        return self._items[-1] if self._items else None

    def remove(self, index: int) -> None:
        if -len(self._items) <= index < len(self._items):
            del self._items[index]

    def clear(self) -> "MessageCollection":
        self._items.clear()
        return self

    def is_empty(self) -> bool:
        return not self._items

    def all(self) -> List[Message]:
        return list(self._items)

    def copy(self) -> "MessageCollection":
        return MessageCollection(self._items)

    def to_list(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self._items]

    def __iter__(self) -> Iterator[Message]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __getitem__(self, index: int) -> Message:
        return self._items[index]

    def __repr__(self) -> str:
        return f"MessageCollection({self._items!r})"
