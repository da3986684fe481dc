"""JSON-file persistence: one ``<family_id>.json`` per family.

``load()`` returns None only when the family file does not exist. Anything
else that goes wrong (unreadable file, bad JSON, a matrix that breaks the
model invariants) raises StorageError so callers can tell "no such family"
from "the store is broken".
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
import threading
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from .models import Family

log = logging.getLogger(__name__)

_FAMILY_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class StorageError(RuntimeError):
    pass


def get_data_dir() -> Path:
    return Path(os.environ.get("GENEALOGY_DATA_DIR") or "./data")


class FamilyStore:
    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self._lock = threading.RLock()

    def _path(self, family_id: str) -> Path:
        if not _FAMILY_ID_RE.match(family_id or ""):
            raise ValueError(f"invalid family id: {family_id!r}")
        return self.data_dir / f"{family_id}.json"

    def exists(self, family_id: str) -> bool:
        if not _FAMILY_ID_RE.match(family_id or ""):
            return False
        return self._path(family_id).exists()

    def load(self, family_id: str) -> Family | None:
        if not _FAMILY_ID_RE.match(family_id or ""):
            return None

        path = self._path(family_id)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"cannot read family {family_id}: {exc}") from exc

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Family.from_dict(data)
        except (ValueError, KeyError, TypeError) as exc:
            # json.JSONDecodeError is a ValueError.
            log.warning("corrupt family file %s: %s", path, exc)
            raise StorageError(f"corrupt family file {path.name}: {exc}") from exc

    def save(self, family: Family) -> None:
        path = self._path(family.id)
        payload = json.dumps(family.to_dict(), indent=2, ensure_ascii=False)

        with self._lock:
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{family.id}.", suffix=".tmp")
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        f.write(payload)
                    os.replace(tmp_name, path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                raise StorageError(f"cannot write family {family.id}: {exc}") from exc

    def delete(self, family_id: str) -> bool:
        if not _FAMILY_ID_RE.match(family_id or ""):
            return False

        with self._lock:
            try:
                self._path(family_id).unlink()
            except FileNotFoundError:
                return False
            except OSError as exc:
                raise StorageError(f"cannot delete family {family_id}: {exc}") from exc
        log.info("deleted family %s", family_id)
        return True

    def list_families(self) -> list[Family]:
        if not self.data_dir.exists():
            return []

        try:
            names = sorted(p.stem for p in self.data_dir.glob("*.json"))
        except OSError as exc:
            raise StorageError(f"cannot list {self.data_dir}: {exc}") from exc

        out: list[Family] = []
        for family_id in names:
            family = self.load(family_id)
            if family is not None:
                out.append(family)
        return out

    def find_by_name(self, name: str) -> Family | None:
        want = (name or "").strip().casefold()
        for family in self.list_families():
            if family.name.strip().casefold() == want:
                return family
        return None

    @contextmanager
    def edit(self, family_id: str) -> Iterator[Family | None]:
        """Load a family, yield it for mutation, and save it on clean exit.

        Yields None (and saves nothing) when the family does not exist. The
        store lock is held for the whole load-modify-save sequence.
        """

        with self._lock:
            family = self.load(family_id)
            yield family
            if family is not None:
                self.save(family)


@lru_cache(maxsize=1)
def get_store() -> FamilyStore:
    return FamilyStore(get_data_dir())
