# dealership/utils/responses.py
"""Response envelope: {status, data?, message?, metadata?}"""
from typing import Any, Dict, Optional
from aiohttp import web
from pydantic import BaseModel
from ..models.base import PaginatedResult


def to_json(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_json(item) for item in data]
    if isinstance(data, dict):
        return {key: to_json(value) for key, value in data.items()}
    return data


def _envelope(status: bool, data: Any = None, message: Optional[str] = None,
              metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": status}
    if data is not None:
        body["data"] = to_json(data)
    if message:
        body["message"] = message
    if metadata:
        body["metadata"] = to_json(metadata)
    return body


def success(data: Any = None, message: Optional[str] = None,
            metadata: Optional[Dict[str, Any]] = None) -> web.Response:
    return web.json_response(_envelope(True, data, message, metadata), status=200)


def created(data: Any, message: str = "Resource created successfully") -> web.Response:
    return web.json_response(_envelope(True, data, message), status=201)


def paginated(result: PaginatedResult,
              metadata: Optional[Dict[str, Any]] = None) -> web.Response:
    return web.json_response(_envelope(
        True,
        result.items,
        metadata={"pagination": result.pagination, **(metadata or {})}
    ), status=200)


def error(message: str, status_code: int = 500) -> web.Response:
    return web.json_response(_envelope(False, message=message or "Internal server error"),
                             status=status_code)
