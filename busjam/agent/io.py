"""I/O utilities for reading and writing snapshots."""

from __future__ import annotations

import json
from pathlib import Path

from busjam.core.errors import ConfigurationError
from busjam.core.snapshot import BoardSnapshot, GameSnapshot


def load_board(path: Path) -> BoardSnapshot:
    """Read a legend layout file ("R . X" rows, row 0 first).

    Args:
        path: Path to the layout file

    Returns:
        BoardSnapshot parsed from the file
    """
    with Path(path).open(encoding="utf-8") as handle:
        return BoardSnapshot.from_text(handle.read())


def load_game(path: Path) -> GameSnapshot:
    """Read a JSON game snapshot (see `GameSnapshot.to_dict`).

    Raises:
        ConfigurationError: If the file is not valid JSON or the payload is malformed
    """
    with Path(path).open(encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return GameSnapshot.from_dict(payload)


def save_game(game: GameSnapshot, path: Path) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(game.to_dict(), indent=2), encoding="utf-8")


__all__ = ["load_board", "load_game", "save_game"]
