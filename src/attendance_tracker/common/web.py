from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, g, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..core.enums import Role

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (StoreError, 503),
    (ValidationError, 400),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
        if status >= 500:
            logger.error("Request %s %s failed: %s", request.method, request.path, e)
        return jsonify({"message": str(e), "error": e.code}), status


def _resolve_caller(container):
    header = current_app.config["IDENTITY_HEADER"]
    raw = (request.headers.get(header) or "").strip()
    if not raw.isdigit():
        raise AuthenticationError("Not authorized, no identity")

    employee = container.employees_repo.get_by_id(int(raw))
    if not employee:
        raise AuthenticationError("Not authorized, unknown identity")
    return employee


def login_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.employee = _resolve_caller(container)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def manager_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.employee = _resolve_caller(container)
            if g.employee.role != Role.MANAGER:
                raise AuthorizationError("Manager access required")
            return view(*args, **kwargs)

        return wrapper

    return decorator
