"""Shared HTTP helpers used across registry and repository clients.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. Every helper makes exactly one attempt and
reports transport failures as status 0 instead of raising, so callers decide
whether a failure is soft (registry lookups) or fatal (remote provisioning).
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

JsonResponse = Tuple[int, Dict[str, str], Optional[Any]]


def _parse_json(response: requests.Response, url: str, action: str) -> JsonResponse:
    """Decode a response body, tolerating empty or malformed payloads."""
    headers = dict(response.headers)
    if not response.text:
        return response.status_code, headers, None
    try:
        parsed = json.loads(response.text)
    except json.JSONDecodeError:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action=action,
                    outcome="json_decode_error",
                    status_code=response.status_code,
                    target=safe_url(url)
                )
            )
        return response.status_code, headers, None
    return response.status_code, headers, parsed


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[JsonResponse, Optional[str]]:
    """Perform a single GET request and parse the JSON body.

    Args:
        url: Target URL
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        ((status_code, headers_dict, parsed_json_or_none), error_or_none).
        Transport failures yield status 0 and a human-readable error.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target
                )
            )
        try:
            response = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=headers,
                **kwargs
            )
        except requests.Timeout:
            return (0, {}, None), f"request timed out after {Constants.REQUEST_TIMEOUT} seconds"
        except requests.RequestException as exc:  # includes ConnectionError
            return (0, {}, None), f"connection error: {exc}"

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                status_code=response.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target
            )
        )
    return _parse_json(response, url, "get_json"), None


def post_json(
    url: str,
    *,
    payload: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[JsonResponse, Optional[str]]:
    """Perform a single POST request with a JSON body and parse the reply.

    Args:
        url: Target URL.
        payload: JSON-serializable request body.
        headers: Optional request headers.
        **kwargs: Passed through to requests.post.

    Returns:
        Same shape as :func:`get_json`.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="POST",
                    target=safe_target
                )
            )
        try:
            response = requests.post(
                url,
                json=payload,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=headers,
                **kwargs
            )
        except requests.Timeout:
            return (0, {}, None), f"request timed out after {Constants.REQUEST_TIMEOUT} seconds"
        except requests.RequestException as exc:  # includes ConnectionError
            return (0, {}, None), f"connection error: {exc}"

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="POST",
                status_code=response.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target
            )
        )
    return _parse_json(response, url, "post_json"), None
