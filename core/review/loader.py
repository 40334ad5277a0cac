from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, List, Sequence, Union

from core.review.classifier import classify
from core.review.errors import ParseError
from core.review.models import Document, InvalidDocument


logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8

PathLike = Union[str, Path]


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    # json accepts NaN / Infinity / -Infinity, standard JSON does not
    raise _NonStandardConstant(name)


def read_json(path: PathLike) -> Any:
    """Read one UTF-8 JSON file. Raises ParseError for anything unreadable."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"), parse_constant=_reject_constant)
    except OSError as e:
        raise ParseError(f"cannot read file ({e.strerror or e})", source=str(path)) from e
    except UnicodeDecodeError as e:
        raise ParseError("not UTF-8 text", source=str(path)) from e
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON ({e.msg} at line {e.lineno})", source=str(path)) from e
    except _NonStandardConstant as e:
        raise ParseError(f"invalid JSON (non-standard constant {e})", source=str(path)) from e


def load_document(path: PathLike) -> Document:
    source = str(path)
    try:
        payload = read_json(path)
    except ParseError as e:
        logger.warning("Skipping %s: %s", source, e.reason)
        return InvalidDocument(source=source, reason=e.reason)

    document = classify(payload, source=source)
    if isinstance(document, InvalidDocument):
        logger.warning("Skipping %s: not a goals or ratings document", source)
    else:
        logger.debug("Loaded %s as %s", source, document.kind)
    return document


def load_documents(paths: Sequence[PathLike], *, max_workers: int = DEFAULT_MAX_WORKERS) -> List[Document]:
    """
    Load and classify every path concurrently.

    Results keep the input order. A file that fails to load becomes an
    InvalidDocument and never affects the others.
    """
    if not paths:
        return []
    workers = max(1, min(max_workers, len(paths)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(load_document, paths))
