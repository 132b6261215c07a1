from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional


@contextmanager
def atomic_rewrite(path: Path) -> Iterator[Path]:
    """Yield a staging copy of ``path`` that replaces it once the block succeeds.

    The copy lives next to the original so ``os.replace`` stays on one
    filesystem. If the block raises, the copy is removed and the original is
    left exactly as it was.
    """
    fd, name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=path.suffix, dir=path.parent)
    os.close(fd)
    staging = Path(name)
    try:
        shutil.copy2(path, staging)
        yield staging
        os.replace(staging, path)
    except BaseException:
        staging.unlink(missing_ok=True)
        raise


def safe_stat(path: Path) -> Optional[os.stat_result]:
    try:
        return path.stat()
    except OSError:
        return None
