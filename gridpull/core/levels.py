from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import yaml

from gridpull.core.geometry import Direction, Point, PointDir
from gridpull.core.resources import load_bundled_bytes

logger = logging.getLogger(__name__)


class LevelFormatError(ValueError):
    """Raised when a level pack document has the wrong shape."""


@dataclass(frozen=True)
class LevelPackInfo:
    title: str = ""
    description: str = ""
    version: str = ""


@dataclass(frozen=True)
class Level:
    """A single puzzle board with its saved progress.

    ``nodes`` and ``arcs`` accept any iterable and are stored as tuples.
    Nothing here checks that the start and final nodes belong to ``nodes``;
    the board builder owns that.
    """

    name: str
    description: str
    nodes: Tuple[Point, ...]
    arcs: Tuple[PointDir, ...]
    start_node: Point
    final_node: Point
    start_pull: Direction = Direction.NONE
    moves: int = 0
    time_elapsed: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "arcs", tuple(self.arcs))

    @property
    def is_fresh(self) -> bool:
        """True when the level has never been played."""
        return self.moves == 0 and self.time_elapsed == 0


@dataclass(frozen=True)
class LevelPack:
    info: LevelPackInfo
    levels: Tuple[Level, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "levels", tuple(self.levels))

    def __len__(self) -> int:
        return len(self.levels)

    def __getitem__(self, index: int) -> Level:
        return self.levels[index]

    def __iter__(self) -> Iterator[Level]:
        return iter(self.levels)


@dataclass(frozen=True)
class LevelRecord:
    """Level fields as decoded, before start/final defaulting."""

    name: str = ""
    description: str = ""
    moves: int = 0
    time_elapsed: float = 0.0
    nodes: Tuple[Point, ...] = ()
    arcs: Tuple[PointDir, ...] = ()
    start_node: Optional[Point] = None
    final_node: Optional[Point] = None
    start_pull: Direction = Direction.NONE


@dataclass(frozen=True)
class PackRecord:
    info: LevelPackInfo = field(default_factory=LevelPackInfo)
    levels: Tuple[LevelRecord, ...] = ()


def resolve_level(record: LevelRecord) -> Level:
    """Build a Level, taking start/final from the node list when not given."""
    if not record.nodes:
        raise LevelFormatError(f"level {record.name!r}: 'nodes' is empty")
    start = record.start_node if record.start_node is not None else record.nodes[0]
    final = record.final_node if record.final_node is not None else record.nodes[-1]
    return Level(
        name=record.name,
        description=record.description,
        nodes=record.nodes,
        arcs=record.arcs,
        start_node=start,
        final_node=final,
        start_pull=record.start_pull,
        moves=record.moves,
        time_elapsed=record.time_elapsed,
    )


# ---------------------------------------------------------------------------
# Decoding helpers
# ---------------------------------------------------------------------------

def _normalize_key(key: Any) -> str:
    # timeElapsed, time_elapsed and TimeElapsed all name the same field
    return str(key).replace("_", "").replace("-", "").lower()


_TEXT_FIELDS = frozenset({"name", "description", "title", "version"})
_NULL_TAG = "tag:yaml.org,2002:null"


class _PackLoader(yaml.SafeLoader):
    """SafeLoader that keeps free-form text fields exactly as written.

    Without this ``version: 1.10`` would load as the float ``1.1`` and
    ``title: yes`` as ``True``.
    """

    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)
        for key_node, value_node in node.value:
            if (
                isinstance(key_node, yaml.ScalarNode)
                and isinstance(value_node, yaml.ScalarNode)
                and value_node.tag != _NULL_TAG
                and _normalize_key(key_node.value) in _TEXT_FIELDS
            ):
                mapping[self.construct_object(key_node)] = value_node.value
        return mapping


def _fields(raw: Any, known: Iterable[str], where: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise LevelFormatError(f"{where}: expected a mapping, got {type(raw).__name__}")
    wanted = {_normalize_key(name): name for name in known}
    result: Dict[str, Any] = {}
    for key, value in raw.items():
        name = wanted.get(_normalize_key(key))
        if name is None:
            logger.debug("%s: ignoring unknown field %r", where, key)
            continue
        if name in result:
            logger.debug("%s: field %r given more than once; using %r", where, name, key)
        result[name] = value
    return result


def _text(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LevelFormatError(f"{where}: expected text, got {type(value).__name__}")
    return value


def _point(value: Any, where: str) -> Point:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise LevelFormatError(f"{where}: expected [x, y], got {value!r}")
    x, y = value
    if not all(isinstance(c, int) and not isinstance(c, bool) for c in (x, y)):
        raise LevelFormatError(f"{where}: coordinates must be integers, got {value!r}")
    return Point(x, y)


def _direction(value: Any, where: str) -> Direction:
    try:
        return Direction.parse(value)
    except ValueError as e:
        raise LevelFormatError(f"{where}: {e}") from e


def _list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise LevelFormatError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def _level_record(raw: Any, where: str) -> LevelRecord:
    data = _fields(
        raw,
        ("name", "description", "moves", "time_elapsed", "nodes", "arcs",
         "start_node", "final_node", "start_pull"),
        where,
    )
    if data.get("nodes") is None:
        raise LevelFormatError(f"{where}: missing 'nodes'")
    nodes = tuple(
        _point(node, f"{where}.nodes[{i}]")
        for i, node in enumerate(_list(data["nodes"], f"{where}.nodes"))
    )
    if not nodes:
        raise LevelFormatError(f"{where}: 'nodes' is empty")

    arcs: List[PointDir] = []
    for i, raw_arc in enumerate(_list(data.get("arcs"), f"{where}.arcs")):
        arc_where = f"{where}.arcs[{i}]"
        arc = _fields(raw_arc, ("parent", "direction"), arc_where)
        if "parent" not in arc or "direction" not in arc:
            raise LevelFormatError(f"{arc_where}: expected 'parent' and 'direction'")
        arcs.append(PointDir(
            _point(arc["parent"], f"{arc_where}.parent"),
            _direction(arc["direction"], f"{arc_where}.direction"),
        ))

    moves = data.get("moves")
    if moves is None:
        moves = 0
    if not isinstance(moves, int) or isinstance(moves, bool) or moves < 0:
        raise LevelFormatError(f"{where}.moves: expected a non-negative integer, got {moves!r}")
    elapsed = data.get("time_elapsed")
    if elapsed is None:
        elapsed = 0.0
    if (
        not isinstance(elapsed, (int, float))
        or isinstance(elapsed, bool)
        or not math.isfinite(elapsed)
        or elapsed < 0
    ):
        raise LevelFormatError(f"{where}.timeElapsed: expected a non-negative number, got {elapsed!r}")

    start = data.get("start_node")
    final = data.get("final_node")
    return LevelRecord(
        name=_text(data.get("name"), f"{where}.name"),
        description=_text(data.get("description"), f"{where}.description"),
        moves=moves,
        time_elapsed=float(elapsed),
        nodes=nodes,
        arcs=tuple(arcs),
        start_node=_point(start, f"{where}.startNode") if start is not None else None,
        final_node=_point(final, f"{where}.finalNode") if final is not None else None,
        start_pull=_direction(data.get("start_pull"), f"{where}.startPull"),
    )


def _pack_record(raw: Any) -> PackRecord:
    if raw is None:
        raise LevelFormatError("expected a level pack document, got an empty one")
    data = _fields(raw, ("info", "levels"), "pack")

    info = LevelPackInfo()
    if data.get("info") is not None:
        info_data = _fields(data["info"], ("title", "description", "version"), "info")
        info = LevelPackInfo(
            title=_text(info_data.get("title"), "info.title"),
            description=_text(info_data.get("description"), "info.description"),
            version=_text(info_data.get("version"), "info.version"),
        )

    levels = tuple(
        _level_record(raw_level, f"levels[{i}]")
        for i, raw_level in enumerate(_list(data.get("levels"), "levels"))
    )
    return PackRecord(info=info, levels=levels)


class LevelParser:
    """Turns level pack YAML into a :class:`LevelPack`.

    Field names are matched case-insensitively and ignore ``_``/``-``, so
    camelCase and snake_case files both load. Unknown fields are skipped so
    that files written by newer versions still open. Missing ``nodes`` is an
    error, as is anything that does not fit the expected shape; there is no
    partial result.
    """

    @staticmethod
    def decode(text: str) -> LevelPack:
        record = _pack_record(yaml.load(text, Loader=_PackLoader))
        return LevelPack(info=record.info, levels=[resolve_level(r) for r in record.levels])

    @staticmethod
    def decode_file(primary_path: Union[str, Path], fallback_resource: str) -> LevelPack:
        """Load the saved pack, seeding it from the bundled pack on first run.

        The seed copy is written byte for byte, line endings included.
        """
        path = Path(primary_path)
        if path.exists():
            logger.info("Loading levels from %s", path)
            return LevelParser.decode(path.read_bytes().decode("utf-8"))

        data = load_bundled_bytes(fallback_resource)
        logger.info("No saved levels at %s; copying bundled pack %s", path, fallback_resource)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error("Could not write levels to %s: %s", path, e)
            raise
        return LevelParser.decode(data.decode("utf-8"))
