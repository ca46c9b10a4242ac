import logging
from gettext import gettext as _

from glyph_annotation.core.annotation import (
    ParseError,
    PersistenceError,
    PersistenceGateway,
)
from glyph_annotation.core.annotation.utils import format_counts
from glyph_annotation.utils.config import load_config

logger = logging.getLogger(__name__)


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

    print(format_counts(ledger.aggregate_counts()))
    print(_("Total: {total}").format(total=len(ledger)))
    return 0
