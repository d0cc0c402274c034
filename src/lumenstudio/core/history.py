"""Undo/redo chain for the image editor.

The chain starts with the original upload and grows by one step per edit.
Selecting an earlier step and editing again discards every step after it,
like a text editor's undo stack.
"""

from __future__ import annotations

import logging

from lumenstudio.core.models import ImageAsset

logger = logging.getLogger(__name__)


class EditHistory:
    """Append-only edit chain with an active step.

    Attributes:
        steps: All retained steps, ``steps[0]`` being the original.
        active_index: Index of the step currently shown and edited.

    Examples:
        >>> original = ImageAsset(data=b"...", mime_type="image/png")
        >>> history = EditHistory(original)
        >>> history.can_undo
        False
    """

    def __init__(self, original: ImageAsset) -> None:
        self.steps: list[ImageAsset] = [original]
        self.active_index = 0

    @property
    def original(self) -> ImageAsset:
        return self.steps[0]

    @property
    def current(self) -> ImageAsset:
        return self.steps[self.active_index]

    def __len__(self) -> int:
        return len(self.steps)

    def select(self, index: int) -> ImageAsset:
        """Make ``index`` the active step.

        Raises:
            IndexError: If the index is outside the chain.
        """
        if not 0 <= index < len(self.steps):
            raise IndexError(f"History step {index} out of range (0-{len(self.steps) - 1})")
        self.active_index = index
        return self.current

    def push(self, asset: ImageAsset) -> ImageAsset:
        """Append ``asset`` after the active step and activate it.

        Steps after the active one are dropped first.
        """
        dropped = len(self.steps) - (self.active_index + 1)
        if dropped:
            logger.debug(f"Truncating {dropped} history step(s) after step {self.active_index}")
        del self.steps[self.active_index + 1 :]
        self.steps.append(asset)
        self.active_index = len(self.steps) - 1
        return asset

    @property
    def can_undo(self) -> bool:
        return self.active_index > 0

    @property
    def can_redo(self) -> bool:
        return self.active_index < len(self.steps) - 1

    def undo(self) -> ImageAsset:
        if self.can_undo:
            self.active_index -= 1
        return self.current

    def redo(self) -> ImageAsset:
        if self.can_redo:
            self.active_index += 1
        return self.current
