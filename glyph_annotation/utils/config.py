"""Default configuration for glyph annotation."""

import os

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def get_default_config() -> edict:
    return edict(
        canvas=edict(
            width=128,
            height=128,
            stroke_width=8,
            background=[255, 255, 255, 255],
            foreground=[0, 0, 0, 255],
        ),
        dataset=edict(
            ledger_file="data.json",
            image_dir="images",
        ),
        label=edict(
            default="a",
            sentinel="?",
        ),
        gui=edict(
            scale=4,
        ),
    )


def load_config(env=None) -> edict:
    """Default configuration with ``GLYPH_*`` environment overrides applied."""
    if env is None:
        env = os.environ
    return load_cfg_from_env(get_default_config(), env)
