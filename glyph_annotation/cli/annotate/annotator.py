import base64
import logging
import tkinter as tk
from gettext import gettext as _
from tkinter import messagebox

from glyph_annotation.core.annotation import AnnotationSession, PersistenceError
from glyph_annotation.interfaces import GUIAnnotationAdapter
from glyph_annotation.utils.config import load_config

logger = logging.getLogger(__name__)


class AnnotatorApp:
    """Tkinter window: drawing area, label field and action buttons."""

    def __init__(self, master: tk.Tk, session: AnnotationSession, label: str, scale: int):
        self.master = master
        self.master.title(_("Glyph Annotator"))
        self.master.resizable(False, False)

        self.adapter = GUIAnnotationAdapter(
            session,
            update_image_callback=self._redraw,
            message_callback=self._show_message,
            scale=scale,
        )

        width, height = self.adapter.display_size
        self.canvas = tk.Canvas(
            master, width=width, height=height, highlightthickness=1,
            highlightbackground="black", cursor="pencil",
        )
        self.canvas.pack(side=tk.TOP)
        self._photo = None
        self._image_item = self.canvas.create_image(0, 0, anchor=tk.NW)

        self.canvas.bind("<ButtonPress-1>", lambda e: self.adapter.press(e.x, e.y))
        self.canvas.bind("<B1-Motion>", lambda e: self.adapter.drag(e.x, e.y))
        self.canvas.bind("<ButtonRelease-1>", lambda e: self.adapter.release())

        controls = tk.Frame(master)
        controls.pack(side=tk.BOTTOM, fill=tk.X)

        tk.Label(controls, text=_("Label:")).pack(side=tk.LEFT)
        self.label_var = tk.StringVar(value=label)
        entry = tk.Entry(controls, textvariable=self.label_var, width=4)
        entry.pack(side=tk.LEFT)

        tk.Button(controls, text=_("Save"), command=self._on_save).pack(side=tk.LEFT)
        tk.Button(controls, text=_("Undo"), command=self.adapter.undo).pack(side=tk.LEFT)
        tk.Button(controls, text=_("Show Counts"), command=self.adapter.show_counts).pack(side=tk.LEFT)
        tk.Button(controls, text=_("Clear"), command=self.adapter.clear).pack(side=tk.LEFT)

        self.status_var = tk.StringVar()
        tk.Label(master, textvariable=self.status_var, anchor=tk.W).pack(side=tk.BOTTOM, fill=tk.X)

        master.bind("<Return>", lambda e: self._on_save())
        master.bind("<Control-z>", lambda e: self.adapter.undo())
        master.bind("<Escape>", lambda e: self.adapter.clear())

        self._redraw()

    def _on_save(self):
        self.adapter.save(self.label_var.get())

    def _redraw(self):
        data = base64.b64encode(self.adapter.encode_visualization())
        # Keep a reference, Tk drops images that are garbage collected.
        self._photo = tk.PhotoImage(data=data, format="png")
        self.canvas.itemconfigure(self._image_item, image=self._photo)

    def _show_message(self, message: str):
        logger.info(message)
        first_line = message.splitlines()[0] if message else ""
        self.status_var.set(first_line)
        if "\n" in message:
            messagebox.showinfo(first_line, message, parent=self.master)


def handle(args):
    cfg = load_config()
    if args.width is not None:
        cfg.canvas.width = args.width
    if args.height is not None:
        cfg.canvas.height = args.height
    if args.stroke_width is not None:
        cfg.canvas.stroke_width = args.stroke_width
    scale = args.scale if args.scale is not None else cfg.gui.scale
    label = args.label if args.label is not None else cfg.label.default

    session = AnnotationSession.from_config(cfg, args.dataset)
    try:
        session.open()
    except PersistenceError as e:
        logger.error(_("Cannot open dataset: {error}").format(error=e))
        return 1

    logger.info(
        _("Annotating {root} ({n} existing entries)").format(
            root=args.dataset, n=len(session.ledger)
        )
    )

    root = tk.Tk()
    AnnotatorApp(root, session, label=label, scale=int(scale))
    root.mainloop()
    return 0
