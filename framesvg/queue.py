from __future__ import annotations

from typing import Iterator

from framesvg.geometry import ResolvedGeometry
from framesvg.intents import DrawIntent
from framesvg.markup.backend import MarkupBackend
from framesvg.resolve import resolve_intent


class CommandQueue:
    """Ordered draw intents of one frame.

    Recording never touches coordinates; `resolve` maps every intent through the
    geometry frozen for the render pass, strictly in recording order. Intents
    recorded before a call that widens an auto bound still see the widened bound.
    """

    def __init__(self) -> None:
        self._intents: list[DrawIntent] = []
        self._preamble_length = 0

    def record(self, intent: DrawIntent) -> None:
        self._intents.append(intent)

    def seal_preamble(self) -> None:
        """Mark everything recorded so far as the frame's own preamble."""

        self._preamble_length = len(self._intents)

    @property
    def preamble_length(self) -> int:
        return self._preamble_length

    @property
    def intents(self) -> tuple[DrawIntent, ...]:
        return tuple(self._intents)

    def caller_intents(self) -> tuple[DrawIntent, ...]:
        return tuple(self._intents[self._preamble_length :])

    def has_scaffolding(self) -> bool:
        return any(intent.is_scaffolding for intent in self._intents)

    def __len__(self) -> int:
        return len(self._intents)

    def __iter__(self) -> Iterator[DrawIntent]:
        return iter(self._intents)

    def resolve(self, geometry: ResolvedGeometry, backend: MarkupBackend) -> str:
        parts = [resolve_intent(intent, geometry, backend) for intent in self._intents]
        # closes the group opened by the preamble
        parts.append(backend.group_close())
        return "\n".join(part for part in parts if part)
