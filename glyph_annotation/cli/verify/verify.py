import logging
from dataclasses import dataclass, field
from gettext import gettext as _
from typing import List

from glyph_annotation.core.annotation import (
    EntryLedger,
    ParseError,
    PersistenceError,
    PersistenceGateway,
)
from glyph_annotation.utils.config import load_config
from glyph_annotation.utils.misc import try_tqdm

logger = logging.getLogger(__name__)


@dataclass
class DatasetReport:
    """Differences between the ledger and the image directory."""

    num_entries: int = 0
    missing_images: List[str] = field(default_factory=list)
    duplicate_paths: List[str] = field(default_factory=list)
    orphan_images: List[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        # Orphans are left behind by interrupted commits and are harmless.
        return not self.missing_images and not self.duplicate_paths


def audit_dataset(gateway: PersistenceGateway, ledger: EntryLedger) -> DatasetReport:
    report = DatasetReport(num_entries=len(ledger))
    seen = set()
    for entry in try_tqdm(ledger, desc=_("Checking entries"), total=len(ledger)):
        if entry.path in seen:
            report.duplicate_paths.append(entry.path)
        seen.add(entry.path)
        if not gateway.image_exists(entry.path):
            report.missing_images.append(entry.path)

    report.orphan_images = [p for p in gateway.list_images() if p not in seen]
    return report


def handle(args):
    cfg = load_config()
    gateway = PersistenceGateway(
        args.dataset,
        ledger_name=cfg.dataset.ledger_file,
        image_dir=cfg.dataset.image_dir,
    )
    try:
        ledger = gateway.read_ledger()
    except (ParseError, PersistenceError) as e:
        logger.error(_("Cannot read dataset: {error}").format(error=e))
        return 1

    report = audit_dataset(gateway, ledger)

    print(_("Entries: {n}").format(n=report.num_entries))
    for path in report.missing_images:
        print(_("Missing image: {path}").format(path=path))
    for path in report.duplicate_paths:
        print(_("Duplicate path: {path}").format(path=path))
    for path in report.orphan_images:
        print(_("Orphan image: {path}").format(path=path))

    return 0 if report.is_consistent else 2
