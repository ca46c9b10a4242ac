from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _(
    "Check that every ledger entry has an image and list orphan images"
)


def command(subparser):
    subparser.add_argument("dataset", type=Path, nargs="?", default=Path("."))

    def handle(args):
        from .verify import handle as verify_handle

        return verify_handle(args)

    return handle
