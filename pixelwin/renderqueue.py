"""The ordered list of draw calls rendered every frame."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from .image import Image


@dataclass(eq=False)
class DrawCall:
    """A request to draw one instance of an image."""

    image: Image
    instance_id: int

    def z(self) -> int:
        """Return the current depth of the referenced instance."""
        return self.image.instances[self.instance_id].z


class RenderQueue:
    """Draw calls kept in drawing order.

    New calls go to the front; ``sort`` orders them by ascending depth.
    """

    def __init__(self) -> None:
        self._calls: deque[DrawCall] = deque()

    def push_front(self, call: DrawCall) -> None:
        """Insert a draw call at the front of the queue."""
        self._calls.appendleft(call)

    def remove_image(self, image: Image) -> int:
        """Drop every draw call that refers to ``image``; return how many."""
        kept = deque(call for call in self._calls if call.image is not image)
        removed = len(self._calls) - len(kept)
        self._calls = kept
        return removed

    def sort(self) -> None:
        """Order calls by ascending depth.

        Calls of equal depth end up in the reverse of their previous
        order, as each one is inserted ahead of those with the same depth.
        """
        self._calls = deque(sorted(reversed(self._calls), key=DrawCall.z))

    def __iter__(self) -> Iterator[DrawCall]:
        return iter(list(self._calls))

    def __len__(self) -> int:
        return len(self._calls)