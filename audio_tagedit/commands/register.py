from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..index import MediaIndex

logger = logging.getLogger(__name__)


def run(index: MediaIndex, paths: Iterable[Path]) -> int:
    failed = 0
    for path in paths:
        try:
            record = index.register(path)
        except Exception as exc:
            logger.warning("Failed to register %s: %s", path, exc)
            failed += 1
            continue
        print(f"{record.id}\t{record.path}")
    return failed
