"""
Session Module - Linear conversation transcript.
================================================
"""

from typing import Iterable, Optional

from catalog_assistant.shared.schemas import ConversationTurn, Role
from catalog_assistant.shared.utils import unique


class Transcript:
    """
    Append-only record of one session's turns.

    Only clear() removes turns.
    """

    def __init__(self):
        self._turns: list[ConversationTurn] = []

    def add_user(self, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=Role.USER, content=content)
        self._turns.append(turn)
        return turn

    def add_assistant(self, content: str, sources: Iterable[str] = ()) -> ConversationTurn:
        """Append an assistant turn citing the given course codes (deduplicated)."""
        turn = ConversationTurn(role=Role.ASSISTANT, content=content, sources=unique(sources))
        self._turns.append(turn)
        return turn

    @property
    def turns(self) -> list[ConversationTurn]:
        return list(self._turns)

    def last(self) -> Optional[ConversationTurn]:
        return self._turns[-1] if self._turns else None

    def clear(self) -> None:
        self._turns = []

    def to_records(self) -> list[dict]:
        """Turns as JSON-ready dicts."""
        return [turn.model_dump(mode="json") for turn in self._turns]

    def __len__(self) -> int:
        return len(self._turns)
