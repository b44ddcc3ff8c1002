# Core/errors.py
from typing import Any, Iterable


class PortfolioError(Exception):
    """Base for expected failures; rendered as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(PortfolioError):
    status_code = 400


class Unauthorized(PortfolioError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFound(PortfolioError):
    status_code = 404


class CapacityExceeded(PortfolioError):
    status_code = 409


class RateLimited(PortfolioError):
    status_code = 429


def _location(loc: Iterable[Any]) -> str:
    # drop the "body"/"query"/"path" prefix FastAPI puts in front
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts)


def _clean(msg: str) -> str:
    for prefix in ("Value error, ", "Assertion failed, "):
        if msg.startswith(prefix):
            return msg[len(prefix):]
    return msg


def compose_validation_message(errors: Iterable[dict]) -> str:
    """Turn pydantic error dicts into one readable line naming each field."""
    details = []
    for err in errors:
        where = _location(err.get("loc", ()))
        msg = _clean(err.get("msg", "Invalid value"))
        details.append(f'{msg} at "{where}"' if where else msg)
    return "Validation error: " + "; ".join(details)
