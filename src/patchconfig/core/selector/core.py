"""Member selectors: resolve a typed selector to a validated property name.

Usage:
    @dataclass
    class Person:
        name: str
        age: int

    resolve_property_name(Person, lambda p: p.age)  # "age"
    resolve_property_name(Person, "name")  # "name"
    resolve_property_name(Person, lambda p: p.name.upper())  # UnsupportedSelectorError
    resolve_property_name(Person, "nickname")  # UnknownPropertyError

Callable selectors are evaluated once against a recording proxy, never against
a real entity. Only a single direct attribute access on the proxy is accepted.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar, get_origin, get_type_hints
from weakref import WeakKeyDictionary

type Selector = str | Callable[[Any], Any]


class SelectorError(Exception):
    """Base class for selector resolution failures."""

    pass


class UnsupportedSelectorError(SelectorError):
    """Raised when a selector is not a single direct member access."""

    pass


class UnknownPropertyError(SelectorError):
    """Raised when a selector names a member the entity type does not declare."""

    pass


class _MemberAccess:
    """Value handed back by the proxy for one attribute access."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __getattr__(self, item: str) -> Any:
        raise UnsupportedSelectorError(
            f"Selector accesses '.{self.name}.{item}': only direct member access is supported"
        )

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise UnsupportedSelectorError(f"Selector calls '.{self.name}(...)': calls are not supported")

    def __bool__(self) -> bool:
        raise UnsupportedSelectorError(
            f"Selector evaluates '.{self.name}' as a condition: only direct member access is supported"
        )


class _RecordingProxy:
    """Stand-in entity that records attribute accesses made by a selector."""

    __slots__ = ("_accesses",)

    def __init__(self) -> None:
        object.__setattr__(self, "_accesses", [])

    def __getattr__(self, name: str) -> _MemberAccess:
        access = _MemberAccess(name)
        self._accesses.append(access)
        return access

    def __setattr__(self, name: str, value: Any) -> None:
        raise UnsupportedSelectorError(f"Selector assigns '.{name}': selectors must be read-only")


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolved annotations of a class or function.

    When some forward reference does not resolve (typically a name imported
    only under ``TYPE_CHECKING``), each annotation is resolved on its own and
    the unresolvable ones map to ``object``. Never returns strings.
    """
    try:
        return get_type_hints(obj)
    except (NameError, TypeError):
        return _resolve_each(obj)


def _resolve_each(obj: Any) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    if isinstance(obj, type):
        for owner in reversed(obj.__mro__):
            module = sys.modules.get(owner.__module__)
            globalns = getattr(module, "__dict__", {})
            localns = dict(vars(owner))
            for name, annotation in inspect.get_annotations(owner).items():
                hints[name] = _resolve_annotation(annotation, globalns, localns)
    else:
        globalns = getattr(inspect.unwrap(obj), "__globals__", {})
        for name, annotation in getattr(obj, "__annotations__", {}).items():
            hints[name] = _resolve_annotation(annotation, globalns, None)
    return hints


def _resolve_annotation(annotation: Any, globalns: dict[str, Any], localns: Any) -> Any:
    if annotation is None:
        return type(None)
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, TypeError, SyntaxError):
        # Keep ClassVar-ness even when the wrapped type is unresolvable
        if annotation.startswith(("ClassVar", "typing.ClassVar")):
            return ClassVar
        return object


def _is_library_base(klass: type) -> bool:
    """Check if class belongs to Python or Pydantic rather than the entity's own code."""
    return klass is object or klass.__module__.startswith("pydantic")


_members_cache: WeakKeyDictionary[type, Mapping[str, Any]] = WeakKeyDictionary()


def declared_members(entity_type: type) -> Mapping[str, Any]:
    """Collect the members an entity type declares, with their declared types.

    Sources, in precedence order: class annotations (covers dataclasses and
    Pydantic models), properties, ``__slots__``, and ``__init__`` parameters.
    Members without a declared type map to ``object``. Members contributed by
    ``object`` or Pydantic's own base classes are not included.

    Results are cached per class without keeping the class alive.

    Args:
        entity_type: Entity class to inspect.

    Returns:
        Read-only mapping of member name to declared type.
    """
    members = _members_cache.get(entity_type)
    if members is None:
        members = _collect_members(entity_type)
        _members_cache[entity_type] = members
    return members


def _collect_members(entity_type: type) -> Mapping[str, Any]:
    members: dict[str, Any] = {}

    for name, hint in _type_hints(entity_type).items():
        if name.startswith("__") or get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        members[name] = hint

    for klass in reversed(entity_type.__mro__):
        if _is_library_base(klass):
            continue
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and not name.startswith("__") and name not in members:
                members[name] = _type_hints(attr.fget).get("return", object) if attr.fget else object
            elif name == "__slots__":
                slots = (attr,) if isinstance(attr, str) else attr
                for slot in slots:
                    if not slot.startswith("__"):
                        members.setdefault(slot, object)

    init = entity_type.__init__
    if init is not object.__init__:
        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            init_hints = _type_hints(init)
            for param in list(signature.parameters.values())[1:]:
                if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                    continue
                members.setdefault(param.name, init_hints.get(param.name, object))

    return MappingProxyType(members)


def find_member(entity_type: type, name: str, ignore_case: bool = False) -> str | None:
    """Match a payload field name against declared members.

    Args:
        entity_type: Entity class to search.
        name: Field name as it appears in the payload.
        ignore_case: Fall back to a case-insensitive match when there is no exact one.

    Returns:
        The declared member name, or None if nothing matches.
    """
    members = declared_members(entity_type)
    if name in members:
        return name
    if ignore_case:
        folded = name.casefold()
        for member in members:
            if member.casefold() == folded:
                return member
    return None


def property_type(entity_type: type, name: str) -> Any:
    """Declared type of a member, or ``object`` when it has none."""
    return declared_members(entity_type).get(name, object)


def resolve_property_name(entity_type: type, selector: Selector) -> str:
    """Resolve a selector to the name of a member of ``entity_type``.

    Args:
        entity_type: Entity class the selector applies to.
        selector: Member name, or a one-argument callable performing a single
            direct attribute access (``lambda p: p.age``).

    Returns:
        The member name.

    Raises:
        UnsupportedSelectorError: If the selector is not a direct member access.
        UnknownPropertyError: If the member is not declared by ``entity_type``.
    """
    if isinstance(selector, str):
        if not selector.isidentifier():
            raise UnsupportedSelectorError(f"'{selector}' is not a valid member name")
        name = selector
    elif callable(selector):
        name = _evaluate_selector(selector)
    else:
        raise UnsupportedSelectorError(
            f"Selector must be a member name or a callable, got {type(selector).__name__}"
        )

    if name not in declared_members(entity_type):
        raise UnknownPropertyError(f"{entity_type.__name__} has no member '{name}'")
    return name


def _evaluate_selector(selector: Callable[[Any], Any]) -> str:
    proxy = _RecordingProxy()
    try:
        result = selector(proxy)
    except TypeError as e:
        raise UnsupportedSelectorError(
            f"Selector {_describe(selector)} is not a direct member access: {e}"
        ) from e

    accesses: list[_MemberAccess] = object.__getattribute__(proxy, "_accesses")
    if not isinstance(result, _MemberAccess) or len(accesses) != 1 or accesses[0] is not result:
        raise UnsupportedSelectorError(
            f"Selector {_describe(selector)} must return exactly one member of its argument"
        )
    return result.name


def _describe(selector: Callable[[Any], Any]) -> str:
    return getattr(selector, "__qualname__", repr(selector))
