from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mutagen

from ..app import TagEditApp
from ..config import Settings


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def check_line(label: str, status: str, detail: Optional[str] = None) -> str:
    if detail:
        return f"{label}: {status} ({detail})"
    return f"{label}: {status}"


def run(settings: Settings) -> DoctorReport:
    checks: list[str] = []
    ok = True

    checks.append(check_line("mutagen", "OK", mutagen.version_string))
    try:
        app = TagEditApp.create(settings)
    except Exception as exc:
        return DoctorReport(ok=False, checks=checks + [check_line("Index", "ERROR", str(exc))])
    try:
        files, directories = app.index.counts()
        checks.append(
            check_line("Index", "OK", f"{settings.index.path}: {files} file(s), {directories} directory(ies)")
        )

        missing = app.index.missing_paths(limit=20)
        if missing:
            ok = False
            sample = ", ".join(str(path) for path in missing[:3])
            checks.append(check_line("Indexed files", "ERROR", f"{len(missing)}+ missing on disk ({sample})"))
        else:
            checks.append(check_line("Indexed files", "OK", "all present"))

        for name in ("mp3", "flac", "ogg", "opus", "mp4"):
            if app.codecs.codec_for(name) is None:
                checks.append(check_line(f"Codec {name}", "DISABLED", "listed in codecs.disabled"))
            else:
                checks.append(check_line(f"Codec {name}", "ENABLED"))

        if settings.codecs.atomic_writes:
            checks.append(check_line("Atomic writes", "ENABLED"))
        else:
            checks.append(
                check_line("Atomic writes", "WARNING", "disabled; a failed write can leave a file half-written")
            )
    finally:
        app.close()

    return DoctorReport(ok=ok, checks=checks)
