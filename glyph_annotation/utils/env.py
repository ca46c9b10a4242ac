import logging
from gettext import gettext as _
from typing import Dict

from easydict import EasyDict as edict

logger = logging.getLogger(__name__)

ENV_PREFIX = "GLYPH_"


def _coerce(value, current):
    if not isinstance(value, str) or current is None:
        return value
    if isinstance(current, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(value)
    if isinstance(current, (list, tuple)):
        return [int(part) for part in value.split(",")]
    return value


def load_cfg_from_env(cfg: edict, env: Dict[str, str]):
    for k, v in env.items():
        if k.startswith(ENV_PREFIX):
            cfgkey = k[len(ENV_PREFIX):].replace("__", ".").lower()
            logger.warning(
                _(
                    "Changing configuration entry from environment variable: {k}={v}"
                ).format(
                    k=cfgkey, v=v
                )  # noqa:E501
            )  # noqa: E501
            *parts, last = cfgkey.split(".")
            this_cfg = cfg
            for part in parts:
                if this_cfg.get(part) is None:
                    this_cfg[part] = edict()
                this_cfg = this_cfg[part]
            try:
                this_cfg[last] = _coerce(v, this_cfg.get(last))
            except ValueError:
                logger.error(
                    _(
                        "Ignoring {k}={v}: expected a value like {default!r}"
                    ).format(k=cfgkey, v=v, default=this_cfg.get(last))
                )
    return cfg
