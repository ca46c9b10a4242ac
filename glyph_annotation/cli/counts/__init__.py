from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Show how many glyphs each label has in a dataset")


def command(subparser):
    subparser.add_argument("dataset", type=Path, nargs="?", default=Path("."))

    def handle(args):
        from .counts import handle as counts_handle

        return counts_handle(args)

    return handle
