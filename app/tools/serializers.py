from typing import Any, Dict, Iterable, Optional

from bson import ObjectId


def _convert_value(v: Any) -> Any:
    """Convert a single value to a representation the domain models accept."""
    # ObjectId -> str
    if isinstance(v, ObjectId):
        return str(v)
    # datetimes stay datetimes; pydantic handles them on the way out
    return v


def serialize_document(doc: Any, exclude: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Serialize a Beanie/Pydantic document or plain dict into a plain dict.

    - If the object has `model_dump` (Pydantic v2), prefer that.
    - Convert ObjectId values (including the document id) to strings.
    - Drop Beanie bookkeeping such as `revision_id` via `exclude`.
    """
    if doc is None:
        return {}

    if hasattr(doc, "model_dump"):
        data = doc.model_dump()
    elif isinstance(doc, dict):
        data = dict(doc)
    else:
        data = getattr(doc, "__dict__", {}) or {}

    for key in exclude or ():
        data.pop(key, None)

    def recurse(obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: recurse(_convert_value(v)) for k, v in obj.items()}
        if isinstance(obj, list):
            return [recurse(_convert_value(x)) for x in obj]
        return _convert_value(obj)

    return recurse(data)
