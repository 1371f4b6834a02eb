from __future__ import annotations

from gasketgen.model.gaskets.base import GeometrySpec, ShapeKind

_REGISTRY: dict[ShapeKind, type[GeometrySpec]] = {}


def register_gasket(cls: type[GeometrySpec]) -> type[GeometrySpec]:
    """Class decorator to register a generator by its KIND."""
    kind = getattr(cls, "KIND", None)
    if not kind:
        raise ValueError(f"{cls.__name__} must define KIND")
    _REGISTRY[ShapeKind(kind)] = cls
    return cls


def get_spec_class(kind: ShapeKind | str) -> type[GeometrySpec]:
    try:
        key = ShapeKind(str(kind).strip().lower())
    except ValueError:
        raise KeyError(f"No gasket registered for kind '{kind}'") from None
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No gasket registered for kind '{kind}'")
    return cls


def list_kinds() -> list[ShapeKind]:
    return list(_REGISTRY.keys())
