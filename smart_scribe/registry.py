import importlib
from typing import Any, Optional


def load_class(path: str) -> type:
    if not path or "." not in path:
        raise ValueError(f"Invalid class path: {path}")
    module_path, class_name = path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    try:
        return getattr(module, class_name)
    except AttributeError as exc:
        raise ValueError(f"{module_path} has no class {class_name}") from exc


def build_adapter(path: str, settings: dict, expected: Optional[type] = None) -> Any:
    klass = load_class(path)
    if expected is not None and not (isinstance(klass, type) and issubclass(klass, expected)):
        raise TypeError(f"{path} does not implement {expected.__name__}")
    return klass(**settings)
