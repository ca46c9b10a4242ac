# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Draw glyphs and save them as a labeled dataset")


def command(subparser):
    subparser.add_argument(
        "dataset",
        type=Path,
        nargs="?",
        default=Path("."),
        help=_("Dataset directory holding the ledger and the image folder"),
    )
    subparser.add_argument(
        "-l",
        "--label",
        dest="label",
        type=str,
        default=None,
        help=_("Initial label shown in the label field"),
    )
    subparser.add_argument(
        "-s",
        "--scale",
        dest="scale",
        type=int,
        default=None,
        help=_("Zoom factor of the drawing area"),
    )
    subparser.add_argument("--width", dest="width", type=int, default=None)
    subparser.add_argument("--height", dest="height", type=int, default=None)
    subparser.add_argument(
        "--stroke-width", dest="stroke_width", type=int, default=None
    )

    def handle(args):
        from .annotator import handle as annotator_handle

        return annotator_handle(args)

    return handle
