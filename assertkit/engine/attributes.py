"""
AssertKit — Attribute Resolver

Reads a named field from an object or a class regardless of its declared
visibility, walking the ancestor chain (the MRO).

Python has no access modifiers; "visibility" is naming convention:
  name      public
  _name     protected (plain lookup)
  __name    private, stored name-mangled as ``_<Class>__name``

For every class on the chain the resolver checks the plain name and that
class's mangled form. Reads go straight to the namespaces (``vars()``, slot
descriptors) and never through ``__getattr__`` hooks or properties, so a
read neither runs user code nor alters the subject.
"""

from __future__ import annotations

import importlib
import inspect
import re
from typing import Any

import structlog

from assertkit.engine.errors import (
    AttributeNotFoundError,
    InvalidNameError,
    InvalidSubjectError,
)

logger = structlog.get_logger().bind(system="assertkit.attributes")

IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z_\x7f-\xff][a-zA-Z0-9_\x7f-\xff]*")

_MISSING = object()


def validate_attribute_name(name: Any, argument: int = 2) -> str:
    """Raise InvalidNameError unless ``name`` fully matches the identifier pattern."""
    if not isinstance(name, str) or IDENTIFIER_PATTERN.fullmatch(name) is None:
        raise InvalidNameError(argument, "valid attribute name")
    return name


def resolve_attribute(subject: Any, name: str) -> Any:
    """
    Return the value of field ``name`` on a class or an instance.

    A class, or a dotted import path naming a class, resolves a class-level
    ("static") field; any other object resolves an instance field.

    Raises:
        InvalidNameError: ``name`` is not a valid identifier.
        InvalidSubjectError: ``subject`` is None or a path that is not a class.
        AttributeNotFoundError: no class on the chain declares ``name``.
    """
    validate_attribute_name(name)

    if isinstance(subject, str):
        return get_static_attribute(load_class(subject), name)
    if inspect.isclass(subject):
        return get_static_attribute(subject, name)
    if subject is None:
        raise InvalidSubjectError(1, "class name or object")
    return get_object_attribute(subject, name)


def get_static_attribute(cls: Any, name: str) -> Any:
    """
    Value of class-level field ``name`` declared on ``cls`` or an ancestor.

    The name is validated before a dotted-path subject is imported.
    """
    validate_attribute_name(name)
    if isinstance(cls, str):
        cls = load_class(cls)
    if not inspect.isclass(cls):
        raise InvalidSubjectError(1, "class")

    value = _lookup_static(cls, name)
    if value is _MISSING:
        raise AttributeNotFoundError(name, "class")
    logger.debug("attribute_resolved", kind="static", owner=cls.__qualname__, name=name)
    return value


def get_object_attribute(obj: Any, name: str) -> Any:
    """Value of field ``name`` on ``obj``, searching instance then class fields."""
    if obj is None or inspect.isclass(obj):
        raise InvalidSubjectError(1, "object")
    validate_attribute_name(name)

    value = _lookup_instance(obj, name)
    if value is _MISSING:
        value = _lookup_static(type(obj), name)
    if value is _MISSING:
        raise AttributeNotFoundError(name, "object")
    logger.debug("attribute_resolved", kind="instance", owner=type(obj).__qualname__, name=name)
    return value


def has_static_attribute(cls: type, name: str) -> bool:
    validate_attribute_name(name)
    return _lookup_static(cls, name) is not _MISSING


def has_object_attribute(obj: Any, name: str) -> bool:
    validate_attribute_name(name)
    return _lookup_instance(obj, name) is not _MISSING


def load_class(path: str) -> type:
    """Import ``package.module.ClassName`` and return the class."""
    module_name, _, class_name = path.rpartition(".")
    if not module_name:
        module_name = "builtins"
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise InvalidSubjectError(1, "class name") from exc
    cls = getattr(module, class_name, None)
    if not inspect.isclass(cls):
        raise InvalidSubjectError(1, "class name")
    return cls


# ── Lookups ──────────────────────────────────────────────────────────────────


def _mangle(klass: type, name: str) -> str:
    """Private storage name of ``name`` (``x`` or ``__x``) declared on ``klass``."""
    if name.startswith("__") and name.endswith("__"):
        return name
    bare = name[2:] if name.startswith("__") else name
    return f"_{klass.__name__.lstrip('_')}__{bare}"


def _candidate_names(klass: type, name: str) -> tuple[str, ...]:
    return (name, _mangle(klass, name))


def _is_field(value: Any) -> bool:
    """Class namespace entries that are data, not behaviour."""
    if isinstance(value, (staticmethod, classmethod, property)):
        return False
    if inspect.isroutine(value) or inspect.isdatadescriptor(value):
        return False
    return True


def _chain(cls: type) -> tuple[type, ...]:
    return tuple(klass for klass in cls.__mro__ if klass is not object)


def _lookup_static(cls: type, name: str) -> Any:
    for klass in _chain(cls):
        namespace = vars(klass)
        for candidate in _candidate_names(klass, name):
            if candidate in namespace and _is_field(namespace[candidate]):
                return namespace[candidate]
    return _MISSING


def _lookup_instance(obj: Any, name: str) -> Any:
    chain = _chain(type(obj))

    try:
        namespace = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        namespace = None
    if isinstance(namespace, dict):
        if name in namespace:
            return namespace[name]
        for klass in chain:
            mangled = _mangle(klass, name)
            if mangled in namespace:
                return namespace[mangled]

    for klass in chain:
        class_namespace = vars(klass)
        slots = class_namespace.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot != name and slot != f"__{name}":
                continue
            private = slot.startswith("__") and not slot.endswith("__")
            descriptor = class_namespace.get(_mangle(klass, slot) if private else slot)
            if descriptor is None:
                continue
            try:
                return descriptor.__get__(obj, klass)
            except AttributeError:
                # declared slot that was never assigned
                return _MISSING
    return _MISSING
