from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from gridpull.core.levels import Level, LevelPack, LevelPackInfo, LevelParser
from gridpull.core.resources import BEGINNER_LEVELS

logger = logging.getLogger(__name__)

# Whatever the host board builder returns.
Board = Any


class LevelStore:
    """Holds the one level pack loaded at startup.

    Create it once during startup and pass it to whatever needs levels. The
    pack is never reloaded or changed afterwards. Not safe for concurrent
    construction; build it before starting other threads.
    """

    def __init__(self, pack: LevelPack, board_builder: Callable[[Level], Board]) -> None:
        self._pack = pack
        self._board_builder = board_builder

    @classmethod
    def open(
        cls,
        save_path: Union[str, Path],
        board_builder: Callable[[Level], Board],
        fallback_resource: str = BEGINNER_LEVELS,
    ) -> "LevelStore":
        pack = LevelParser.decode_file(save_path, fallback_resource)
        logger.info("Loaded %d level(s) from pack %r", len(pack), pack.info.title)
        return cls(pack, board_builder)

    @property
    def level_count(self) -> int:
        return len(self._pack)

    @property
    def pack_info(self) -> LevelPackInfo:
        return self._pack.info

    def level(self, index: int) -> Optional[Level]:
        if index < 0 or index >= self.level_count:
            return None
        return self._pack[index]

    def build_level(self, index: int) -> Optional[Board]:
        """Build the board for level ``index``, or return None if there is no such level."""
        level = self.level(index)
        if level is None:
            logger.debug("No level at index %d (have %d)", index, self.level_count)
            return None
        return self._board_builder(level)
