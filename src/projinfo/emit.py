"""Delivery of project info snapshots to consumers."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .models import ProjectInfo

logger = logging.getLogger(__name__)

InfoCallback = Callable[[ProjectInfo], None]


class Generation:
    """Epoch counter owned by a consumer.

    The consumer calls :meth:`advance` when it stops caring about earlier
    requests; snapshots tagged with an older epoch are then dropped.
    """

    def __init__(self):
        self.epoch = 0

    def advance(self) -> int:
        """Invalidate all outstanding tokens."""
        self.epoch += 1
        return self.epoch

    def token(self) -> "RequestToken":
        """Return a token for the current epoch."""
        return RequestToken(self, self.epoch)


@dataclass(frozen=True)
class RequestToken:
    """Marks which epoch of a :class:`Generation` a request belongs to."""

    generation: Generation
    epoch: int

    def is_stale(self) -> bool:
        return self.generation.epoch != self.epoch


class GuardedEmitter:
    """Wraps a consumer callback so delivery can never hurt the producer."""

    def __init__(self, callback: InfoCallback, token: Optional[RequestToken] = None):
        self.callback = callback
        self.token = token
        self.emitted = 0

    def __call__(self, info: ProjectInfo) -> bool:
        """Deliver ``info``; return False if it was dropped or failed."""
        if self.token is not None and self.token.is_stale():
            logger.debug(f"Dropping stale snapshot for {info.dir}")
            return False

        try:
            self.callback(info)
        except Exception as e:
            logger.warning(f"Project info consumer failed for {info.dir}: {e}")
            logger.debug(f"Exception details: {e}", exc_info=True)
            return False

        self.emitted += 1
        return True
