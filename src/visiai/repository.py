"""
File-backed scan store. One JSON document per scan under ``<data_dir>/scans``.
"""

import json
import logging
import math
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .data_models import FusedScoreRecord

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
_scan_id_re = re.compile(r"^[0-9a-f]{32}$")


class ScanRepository:
    """Persists one immutable scan document per request; never updates in place."""

    def __init__(self, data_dir: Path, clock: Optional[Callable[[], datetime]] = None):
        self.scans_dir = Path(data_dir) / "scans"
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _path(self, scan_id: str) -> Optional[Path]:
        # Reject anything that is not one of our ids so lookups cannot escape the directory
        if not _scan_id_re.match(scan_id or ""):
            return None
        return self.scans_dir / f"{scan_id}.json"

    def save(self, record: FusedScoreRecord) -> Dict:
        """Store the record, assigning its id and UTC timestamp. Returns the stored document."""
        doc = {
            "id": uuid.uuid4().hex,
            "timestamp": self._clock().isoformat(),
        }
        doc.update(record.to_dict())
        self.scans_dir.mkdir(parents=True, exist_ok=True)
        with open(self.scans_dir / f"{doc['id']}.json", "w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2)
        logger.info(f"Scan {doc['id']} saved for {record.url}")
        return doc

    def _load(self, path: Path) -> Optional[Dict]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping unreadable scan file {path.name}: {e}")
            return None
        if not isinstance(doc, dict):
            logger.warning(f"Skipping scan file {path.name}: not a JSON object")
            return None
        return doc

    def _all(self) -> List[Dict]:
        if not self.scans_dir.exists():
            return []
        docs = [self._load(p) for p in self.scans_dir.glob("*.json")]
        docs = [d for d in docs if d]
        docs.sort(key=lambda d: str(d.get("timestamp", "")), reverse=True)
        return docs

    def list_scans(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, include_screenshot: bool = False) -> Dict:
        """Newest-first page of scans plus pagination info."""
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
        docs = self._all()
        total = len(docs)
        skip = (page - 1) * limit
        data = docs[skip:skip + limit]
        if not include_screenshot:
            data = [{k: v for k, v in d.items() if k != "screenshot"} for d in data]
        return {
            "data": data,
            "pagination": {
                "total": total,
                "page": page,
                "limit": limit,
                "pages": math.ceil(total / limit),
            },
        }

    def get(self, scan_id: str) -> Optional[Dict]:
        path = self._path(scan_id)
        if path is None or not path.exists():
            return None
        return self._load(path)

    def delete(self, scan_id: str) -> bool:
        path = self._path(scan_id)
        if path is None or not path.exists():
            return False
        path.unlink()
        logger.info(f"Scan {scan_id} deleted")
        return True
