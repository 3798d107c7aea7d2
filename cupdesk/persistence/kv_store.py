from __future__ import annotations

import json
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from cupdesk.persistence.models import KeyValueModel


class KeyValueStore:
    """Small JSON key-value store backed by the ``kv_store`` table.

    Values are JSON-encoded on write and decoded on read. A value that no
    longer decodes reads as the caller's default.
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str, default: Any = None) -> Any:
        raw = self.session.scalar(select(KeyValueModel.value).where(KeyValueModel.key == key))
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return default

    def set(self, key: str, value: Any) -> None:
        encoded = json.dumps(value, sort_keys=True, separators=(",", ":"))
        row = self.session.get(KeyValueModel, key)
        if row is None:
            self.session.add(KeyValueModel(key=key, value=encoded))
        else:
            row.value = encoded
        self.session.flush()

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        result = self.session.execute(delete(KeyValueModel).where(KeyValueModel.key.in_(list(keys))))
        return int(result.rowcount or 0)
