"""Split task instruction documents into steps and serve them one at a time."""

import asyncio
import logging
import re
from pathlib import Path
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

ALL_STEPS_COMPLETED = "All steps have been completed."
STEP_NOT_FOUND = "Step not found. Please proceed to the next step."

_STEP_BOUNDARY = re.compile(r"(?:^|\n\r?)(?=#\s)")
_STEP_NUMBER_HEADING = re.compile(r"^#\s+\d+")


def split_task_steps(task: str) -> list[str]:
    """
    Split a task document into steps at every level-1 heading.

    Headings that consist only of a step number are dropped; every other
    line is kept, trimmed, in document order.

    Args:
        task: Full text of the task document

    Returns:
        One text block per step
    """
    task = task.strip()
    if not task:
        return []

    segments = _STEP_BOUNDARY.split(task)
    # A document starting with a heading yields an empty leading segment.
    if len(segments) > 1 and not segments[0]:
        segments = segments[1:]

    steps = []
    for segment in segments:
        lines = [line.strip() for line in segment.strip().split("\n")]
        steps.append("\n".join(line for line in lines if not _STEP_NUMBER_HEADING.match(line)))
    return steps


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class TaskStepCache:
    """
    Parsed task documents keyed by absolute file path.

    A document is read and split the first time it is requested and never
    re-read afterwards, even if the file changes on disk.
    """

    def __init__(self, reader: Optional[Callable[[Path], str]] = None):
        self._reader = reader or _read_text
        self._steps: dict[str, list[str]] = {}
        self._lock = asyncio.Lock()

    def __contains__(self, path: Union[str, Path]) -> bool:
        return str(Path(path).resolve()) in self._steps

    async def steps_for(self, path: Union[str, Path]) -> list[str]:
        """Return the steps of the document at ``path``, reading it on first use."""
        resolved = Path(path).resolve()
        key = str(resolved)

        async with self._lock:
            steps = self._steps.get(key)
            if steps is None:
                logger.info("Reading task document %s", key)
                text = await asyncio.to_thread(self._reader, resolved)
                steps = split_task_steps(text)
                self._steps[key] = steps
                logger.debug("Split %s into %d steps", key, len(steps))

        return steps

    async def get_step(self, path: Union[str, Path], step: int = 1) -> str:
        """
        Get one step of a task document.

        Args:
            path: Path of the task document
            step: 1-based step number

        Returns:
            The step text, or a sentinel message when there is no such step
        """
        steps = await self.steps_for(path)

        if step > len(steps):
            return ALL_STEPS_COMPLETED
        if step < 1:
            return STEP_NOT_FOUND
        return steps[step - 1]
