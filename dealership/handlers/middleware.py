# dealership/handlers/middleware.py
import logging
import time
from aiohttp import web
from pydantic import ValidationError
from ..errors import AppError
from ..utils import responses

logger = logging.getLogger(__name__)


def format_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{field}: {item['msg']}" if field else item['msg'])
    return "; ".join(messages)


@web.middleware
async def request_logger(request: web.Request, handler):
    start = time.perf_counter()
    response = await handler(request)
    duration = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.path_qs} {response.status} {duration:.2f}ms")
    return response


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Turn raised errors into the response envelope"""
    try:
        return await handler(request)
    except AppError as e:
        if e.status_code >= 500:
            logger.error(f"{request.method} {request.path}: {e.message}", exc_info=True)
        return responses.error(e.message, e.status_code)
    except ValidationError as e:
        return responses.error(format_validation_error(e), 422)
    except web.HTTPNotFound:
        return responses.error("Route not found", 404)
    except web.HTTPMethodNotAllowed:
        return responses.error("Method not allowed", 405)
    except web.HTTPException:
        raise
    except Exception:
        logger.error(f"Unhandled error on {request.method} {request.path}", exc_info=True)
        return responses.error("Internal server error", 500)
