# core/schema_registry.py
from __future__ import annotations
from typing import Callable, List, Tuple
from sqlalchemy.engine import Engine
import importlib
import logging
import pkgutil

logger = logging.getLogger(__name__)

# Schema installer type
SchemaInstaller = Callable[[Engine], None]

# Registry: (name, installer_func)
_REGISTRY: List[Tuple[str, SchemaInstaller]] = []

def register(
    name: str | SchemaInstaller, installer: SchemaInstaller | None = None
) -> SchemaInstaller | Callable[[SchemaInstaller], SchemaInstaller]:
    """
    Registers a schema installer function.
    Can be used as a decorator (@register) or a function call (register("name", fn)).
    """
    # Used as @register("name")
    if isinstance(name, str) and installer is None:
        def decorator(fn: SchemaInstaller) -> SchemaInstaller:
            _add(name, fn)
            return fn
        return decorator

    # Used as @register
    elif callable(name) and installer is None:
        _add(name.__name__, name)
        return name

    # Used as register("name", fn)
    elif isinstance(name, str) and callable(installer):
        _add(name, installer)
        return installer

    raise TypeError("Invalid usage of @register")

def _add(name: str, fn: SchemaInstaller) -> None:
    # a module reload must not install the same tables twice
    _REGISTRY[:] = [(n, f) for n, f in _REGISTRY if n != name]
    _REGISTRY.append((name, fn))

def registered_names() -> List[str]:
    return [name for name, _ in _REGISTRY]

def run_all(engine: Engine):
    """
    Runs all registered schema installers in order.
    A failing installer is logged and re-raised; later tables depend on earlier ones.
    """
    logger.info("SchemaRegistry: running %d installers", len(_REGISTRY))
    for name, installer_fn in _REGISTRY:
        try:
            logger.debug("Applying schema: %s", name)
            installer_fn(engine)
        except Exception:
            logger.error("FAILED to apply schema %s", name, exc_info=True)
            raise

def auto_discover(package: str = "schemas"):
    """
    Imports every module of ``package`` so their @register decorators run.
    Modules are imported in name order; installers must not rely on that order.
    """
    pkg = importlib.import_module(package)
    names = sorted(
        module_name
        for _, module_name, is_pkg in pkgutil.walk_packages(pkg.__path__, prefix=f"{package}.")
        if not is_pkg
    )
    for module_name in names:
        importlib.import_module(module_name)
        logger.debug("Discovered schema module: %s", module_name)
