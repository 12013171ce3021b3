from __future__ import annotations

from pathlib import Path

from ...core.importer import ImportEngine, ImportOptions
from ..common import build_device


def run(args) -> None:
    engine = ImportEngine(
        build_device(args),
        notify=print,
        options=ImportOptions(dry_run=args.dry_run),
    )
    report = engine.run(Path(args.package))
    for line in report.summary_lines():
        print(line)
