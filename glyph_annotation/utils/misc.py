import importlib.util
import sys
from pathlib import Path

from tqdm import tqdm


def load_module(script_path: Path, module_name=None):
    script_path = Path(script_path)
    if module_name is None:
        module_name = script_path.stem
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def try_tqdm(iterable, **kwargs):
    """Wrap ``iterable`` in a progress bar when stderr is a terminal."""
    kwargs.setdefault("disable", not sys.stderr.isatty())
    return tqdm(iterable, **kwargs)
