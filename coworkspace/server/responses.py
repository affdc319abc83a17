"""
Response envelope helpers.

Every successful answer uses the same JSON envelope:

* one entity: ``{"status": "success", "data": {"<key>": {...}}}``
* a collection: ``{"status": "success", "results": N, "data": {"<plural>": [...]}}``
* an action without payload: ``{"status": "success", "message": "..."}``
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Type, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

SUCCESS = "success"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _dump(item: Any, schema: Type[ModelT] | None) -> Any:
    if schema is not None and not isinstance(item, BaseModel):
        item = schema.model_validate(item)
    return jsonable_encoder(item)


def single(key: str, item: Any, schema: Type[ModelT] | None = None) -> Dict[str, Any]:
    """Wrap one entity, converting ORM rows through ``schema`` when given."""
    return {"status": SUCCESS, "data": {key: _dump(item, schema)}}


def collection(key: str, items: Iterable[Any], schema: Type[ModelT] | None = None) -> Dict[str, Any]:
    dumped = [_dump(item, schema) for item in items]
    return {"status": SUCCESS, "results": len(dumped), "data": {key: dumped}}


def message(text: str) -> Dict[str, Any]:
    return {"status": SUCCESS, "message": text}


def payload(data: Any) -> Dict[str, Any]:
    """Wrap a response model whose fields form the ``data`` object itself."""
    return {"status": SUCCESS, "data": jsonable_encoder(data)}
