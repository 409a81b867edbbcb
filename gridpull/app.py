"""Application entry point: logging, save location and level store setup."""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QCoreApplication, QStandardPaths

from gridpull.core.levels import Level
from gridpull.core.resources import SAVED_LEVELS_FILENAME
from gridpull.core.store import Board, LevelStore

APP_NAME = "GridPull"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def default_save_path() -> Path:
    """Location of the user's saved level pack in the per-user data directory."""
    data_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if not data_dir:
        raise RuntimeError("No writable application data directory is available")
    return Path(data_dir) / SAVED_LEVELS_FILENAME


def create_level_store(
    board_builder: Callable[[Level], Board],
    save_path: Optional[Path] = None,
) -> LevelStore:
    """Load the level store once at startup, before any other thread touches it."""
    return LevelStore.open(save_path or default_save_path(), board_builder)


def run() -> int:
    """Load the level pack and log what it contains."""
    QCoreApplication.setOrganizationName(APP_NAME)
    QCoreApplication.setApplicationName(APP_NAME)
    configure_logging()

    store = create_level_store(lambda level: level)
    info = store.pack_info
    logging.info(f"{info.title} v{info.version}: {store.level_count} level(s)")
    for index in range(store.level_count):
        level = store.build_level(index)
        logging.info(
            f"  {index}: {level.name} ({len(level.nodes)} nodes, {len(level.arcs)} arcs, "
            f"start {level.start_node.x},{level.start_node.y} "
            f"-> final {level.final_node.x},{level.final_node.y})"
        )
    return 0


if __name__ == "__main__":
    sys.exit(run())
