"""Utility functions for file I/O, value coercion and dates."""

import json
import logging
import math
import os
import re
import unicodedata
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('futsal_league.utils')

_DIGITS_RE = re.compile(r'(\d+)')
_PUNCT_RE = re.compile(r'[^\w\s]', flags=re.UNICODE)


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file, optionally validating it against a pydantic model.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        ValueError: If schema validation fails

    Example:
        from futsal_league.schemas import LeagueStateFile
        state = load_json('data/league_state.json', schema=LeagueStateFile)
    """
    path = Path(path)
    if not path.is_file():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    text = path.read_text(encoding='utf-8')
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} (line {e.lineno}, column {e.colno})')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e
    logger.debug(f'Loaded JSON from {path}')

    if schema is None:
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e.error_count()} error(s)')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write ``data`` (plain JSON values or a pydantic model) to ``path``.

    The text goes to ``<name>.tmp`` first and is then moved over ``path``.
    Parent directories are created as needed.
    """
    path = Path(path)
    payload = data.model_dump(by_alias=True) if isinstance(data, BaseModel) else data
    try:
        text = json.dumps(payload, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data for {path} is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e

    path.parent.mkdir(parents=True, exist_ok=True)
    partial = path.with_name(path.name + '.tmp')
    try:
        partial.write_text(text + '\n', encoding='utf-8')
        os.replace(partial, path)
    except OSError as e:
        logger.error(f'Failed to write {path}: {e}')
        partial.unlink(missing_ok=True)
        raise
    logger.debug(f'Wrote {path}')


def load_json_safe(path: Path | str, default: Any = None, schema: type[T] | None = None) -> Any | T:
    """Like load_json, but returns ``default`` for a missing or invalid file."""
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        return default


def as_number(value: Any, default: int | float = 0) -> int | float:
    """Coerce a loosely typed value to a finite number.

    Integral values come back as ``int``. Anything that isn't a finite
    number (None, '', 'abc', NaN) returns ``default``.
    """
    if value is None or isinstance(value, (list, dict)):
        return default
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def as_list(value: Any) -> list:
    """Return ``value`` as a list if it is a list or tuple, else an empty list."""
    if isinstance(value, tuple):
        return list(value)
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict:
    """Return ``value`` if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def ensure_sunday(iso: Any, today: Optional[date] = None) -> str:
    """
    Normalize an ISO date to the Sunday that ends its week.

    Sundays map to themselves. Unparseable input maps to the Sunday of
    the current week (``today`` can be passed for determinism).

    Example:
        ensure_sunday('2025-03-05')  # '2025-03-09'
    """
    try:
        d = date.fromisoformat(str(iso).strip()[:10])
    except ValueError:
        d = today or date.today()
    return (d + timedelta(days=(6 - d.weekday()) % 7)).isoformat()


def season_id_from_iso(iso: str) -> str:
    """Half-year season id: 'YYYY-1' for Jan-Jun, 'YYYY-2' for Jul-Dec."""
    try:
        year = int(str(iso)[0:4])
        month = int(str(iso)[5:7])
    except ValueError:
        return ''
    return f'{year}-1' if month <= 6 else f'{year}-2'


def collation_key(name: Any) -> tuple:
    """
    Sort key approximating a case-insensitive, numeric-aware collation.

    Punctuation is ignored and digit runs compare as numbers, so
    'Player 2' sorts before 'Player 10'.
    """
    text = unicodedata.normalize('NFKC', str(name or '')).casefold()
    text = _PUNCT_RE.sub('', text).strip()
    parts = _DIGITS_RE.split(text)
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))
