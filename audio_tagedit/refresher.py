from __future__ import annotations

import logging
from typing import Optional

from .models import MediaFileRecord
from .protocols import MediaIndexProtocol

logger = logging.getLogger(__name__)


class IndexRefresher:
    def __init__(self, index: MediaIndexProtocol) -> None:
        self.index = index

    def refresh(self, record: MediaFileRecord, parent: Optional[MediaFileRecord]) -> None:
        # The parent aggregates its children's cached values: child first.
        self.index.refresh(record)
        if parent is None:
            logger.debug("No parent to refresh for %s", record.path)
            return
        self.index.refresh(parent)
