"""AnimationLock - one chapter switch at a time."""

from contextlib import contextmanager
from typing import Iterator

from .errors import ConcurrentTransitionRejected


class AnimationLock:
    """
    Boolean gate around the visual chapter switch.

    Held from just before the page content starts switching until it has
    finished, on every exit path.
    """

    def __init__(self):
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    @contextmanager
    def hold(self) -> Iterator[None]:
        """
        Hold the lock for the duration of the block.

        Raises:
            ConcurrentTransitionRejected: if a switch is already in flight
        """
        if self._held:
            raise ConcurrentTransitionRejected("Chapter switch already in progress")
        self._held = True
        try:
            yield
        finally:
            self._held = False
