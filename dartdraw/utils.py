"""JSON file helpers shared by the config loader and the tournament store."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

Model = TypeVar('Model', bound=BaseModel)
logger = logging.getLogger('dartdraw.utils')


def load_json(path: Path | str, schema: type[Model] | None = None) -> Any | Model:
    """
    Read a JSON file, optionally validating it into a pydantic model.

    Raises:
        FileNotFoundError: If the file is missing
        json.JSONDecodeError: If the file is not valid JSON (a ValueError)
        ValueError: If the data does not match the schema

    Example:
        from dartdraw.schemas import TournamentsFile
        data = load_json('data/tournaments.json', schema=TournamentsFile)
    """
    path = Path(path)
    if not path.is_file():
        logger.error(f'Missing JSON file: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    raw = path.read_text(encoding='utf-8')
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f'{path} is not valid JSON (line {e.lineno}, column {e.colno})')
        raise

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e.error_count()} error(s)')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write data (plain JSON types or a pydantic model) to a file.

    The text goes to a temporary file in the same directory which then
    replaces the target, so readers never see a half-written file.

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, BaseModel):
        data = data.model_dump(mode='json')
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        os.replace(tmp_name, path)
    except OSError:
        logger.error(f'Could not write {path}; previous contents kept')
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug(f'Wrote {len(text)} bytes to {path}')
