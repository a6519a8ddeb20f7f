# src/odestep/steppers/registry.py
from __future__ import annotations
from typing import Dict, List, Optional

from odestep.errors import UnknownMethodError
from .base import Method, MethodEntry, MethodMeta

__all__ = ["register", "get_method", "get_entry", "registry", "resolve", "list_methods"]

# name -> entry
_registry: Dict[str, MethodEntry] = {}

def register(fn: Method, meta: MethodMeta) -> MethodEntry:
    """
    Register a method by meta.name and meta.aliases.
    Enforces uniqueness of the canonical name; aliases may overlap only
    if they point to the same callable.
    """
    name = meta.name
    if name in _registry and _registry[name].fn is not fn:
        raise ValueError(f"Method '{name}' already registered with a different callable.")
    for alias in meta.aliases:
        if alias in _registry and _registry[alias].fn is not fn:
            raise ValueError(f"Alias '{alias}' already registered for a different callable.")

    # nothing is written until every key is known to be free
    entry = MethodEntry(fn=fn, meta=meta)
    _registry[name] = entry
    for alias in meta.aliases:
        _registry[alias] = entry
    return entry

def get_entry(name: str) -> MethodEntry:
    """
    Return the registered entry for 'name' or raise UnknownMethodError.
    """
    try:
        return _registry[name]
    except KeyError:
        raise UnknownMethodError(name, sorted({e.meta.name for e in _registry.values()})) from None

def get_method(name: str) -> Method:
    """Return the registered callable for 'name'."""
    return get_entry(name).fn

def resolve(method) -> Method:
    """Accept either a method callable or a registered name."""
    if isinstance(method, str):
        return get_method(method)
    if not callable(method):
        raise TypeError(f"method must be callable or a registered name; got {type(method).__name__}")
    return method

def registry() -> Dict[str, MethodEntry]:
    """
    Read-only-ish view (do not mutate externally).
    """
    return dict(_registry)

def list_methods(*, order: Optional[int] = None, family: Optional[str] = None) -> List[str]:
    """
    Canonical method names (aliases excluded), optionally filtered by
    order and family, sorted by (order, name).
    """
    seen = {}
    for entry in _registry.values():
        meta = entry.meta
        if order is not None and meta.order != order:
            continue
        if family is not None and meta.family != family:
            continue
        seen[meta.name] = meta
    return sorted(seen, key=lambda n: (seen[n].order, n))
