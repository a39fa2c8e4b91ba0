# -*- coding: utf-8 -*-
"""Client records stored as JSON files.

One ``<client_id>.json`` file per client. The planner only reads from here;
``save_client`` exists for seeding and tests.
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import settings

logger = logging.getLogger(__name__)


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _safe_key(value: str) -> str:
    # Percent-encoding is injective, so distinct ids never share a file.
    encoded = re.sub(
        r"[^A-Za-z0-9_\-@]",
        lambda m: "".join(f"%{b:02X}" for b in m.group(0).encode("utf-8")),
        value,
    )
    if not encoded:
        return "%"
    if len(encoded) > 200:
        digest = hashlib.sha256(value.encode("utf-8")).hexdigest()[:16]
        encoded = f"{encoded[:180]}~{digest}"
    return encoded


def _client_path(client_id: str, root: Optional[Path] = None) -> Path:
    base = root if root is not None else settings.clients_dir
    return base / f"{_safe_key(client_id)}.json"


def get_client(client_id: str, root: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Return the raw record for ``client_id`` or ``None`` when there is none."""
    fp = _client_path(client_id, root)
    if not fp.exists():
        return None
    try:
        data = json.loads(fp.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("unreadable client record %s: %s", fp, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("client record %s is not a JSON object", fp)
        return None
    return data


def save_client(client_id: str, record: Dict[str, Any], root: Optional[Path] = None) -> Path:
    fp = _client_path(client_id, root)
    _ensure_dir(fp.parent)
    fp.write_text(json.dumps(record, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
    return fp


class JsonClientStore:
    """Lookup bound to one directory, usable wherever ``fetch_client`` is expected."""

    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else settings.clients_dir

    def __call__(self, client_id: str) -> Optional[Dict[str, Any]]:
        return get_client(client_id, self.root)

    def save(self, client_id: str, record: Dict[str, Any]) -> Path:
        return save_client(client_id, record, self.root)
