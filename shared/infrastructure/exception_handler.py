"""
DRF exception handler translating domain errors into API responses.

Configured as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. Domain errors become
``{"detail": ..., "code": ...}`` with the status below; everything else is
left to DRF's default handler.
"""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    Conflict,
    DomainError,
    Forbidden,
    InvalidInput,
    NotFound,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    Conflict: status.HTTP_409_CONFLICT,
    UpstreamFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: DomainError) -> int:
    for error_class, http_status in STATUS_BY_ERROR.items():
        if isinstance(exc, error_class):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def domain_exception_handler(exc, context):  # type: ignore
    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    http_status = status_for(exc)
    view = context.get("view")
    if isinstance(exc, UpstreamFailure):
        logger.error(f"Upstream failure in {view.__class__.__name__}: {exc.message}")
    else:
        logger.info(f"{exc.__class__.__name__} in {view.__class__.__name__}: {exc.message}")

    return Response({"detail": exc.message, "code": exc.code}, status=http_status)
