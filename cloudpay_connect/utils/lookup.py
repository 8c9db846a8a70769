from typing import Any, Iterable, Mapping, Sequence

_MISSING = object()


def dig(data: Any, path: str) -> Any:
    """
    Walk a dotted path ("Model.InvoiceId", "Items.0.Label") over nested
    mappings and sequences. Returns _MISSING when any segment is absent.
    """
    node = data
    for key in path.split("."):
        if isinstance(node, Mapping):
            if key not in node:
                return _MISSING
            node = node[key]
        elif isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
            try:
                node = node[int(key)]
            except (ValueError, IndexError):
                return _MISSING
        else:
            return _MISSING
    return node


def lookup(data: Any, paths: Iterable[str], default: Any = "") -> Any:
    """First non-None value found along the given dotted paths, else default."""
    for path in paths:
        value = dig(data, path)
        if value is not _MISSING and value is not None:
            return value
    return default
