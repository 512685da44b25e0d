from __future__ import annotations

import json
from pathlib import Path

from .model import DegenerateGeometryError, InvalidShapeError, MalformedInputError, Shaft


class ShaftFileError(RuntimeError):
    pass


def _read_json(path: Path) -> dict:
    if not path.exists():
        raise ShaftFileError(f"{path}: file not found")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ShaftFileError(f"{path}: cannot read JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ShaftFileError(f"{path}: top-level JSON value must be an object")
    return data


def _write_json(path: Path, obj: dict) -> None:
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")


def load_shaft_json(path: str | Path) -> Shaft:
    """Read a shaft file written by :func:`save_shaft_json` (SI units)."""
    p = Path(path)
    data = _read_json(p)
    try:
        return Shaft.from_dict(data)
    except InvalidShapeError:
        raise
    except (MalformedInputError, DegenerateGeometryError) as exc:
        raise ShaftFileError(f"{p}: {exc}") from exc


def save_shaft_json(shaft: Shaft, path: str | Path) -> Path:
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        _write_json(p, shaft.to_dict())
    except OSError as exc:
        raise ShaftFileError(f"{p}: cannot write shaft file ({exc})") from exc
    return p
