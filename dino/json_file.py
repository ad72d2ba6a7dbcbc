from __future__ import annotations

import json
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError

from .errors import StoreCorruptError

DocumentTree = dict[str, JsonValue]

_TREE_ADAPTER: TypeAdapter[DocumentTree] = TypeAdapter(DocumentTree)


def parse_tree(raw: str) -> DocumentTree:
    """
    Parse the backing file's text into a document tree.

    Empty (or whitespace-only) text is a brand-new file and parses as {}.
    Anything else must be a JSON object, otherwise StoreCorruptError.
    """
    if not raw.strip():
        return {}
    try:
        return _TREE_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise StoreCorruptError(f"Backing file is not a JSON object: {e.errors()[0]['msg']}") from e


def dump_tree(tree: DocumentTree, *, indent: int | None = 2, sort_keys: bool = True) -> str:
    text = json.dumps(tree, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
    return text + "\n"


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))
