"""
API version negotiation.

Clients pick an API version with, in order of precedence:

* the ``api-version`` query parameter (``/allproducts?api-version=2.0``),
* the ``X-API-Version`` header,
* the ``ver`` parameter of the ``Content-Type`` or ``Accept`` media
  type (``Accept: application/json;ver=2.0``).

The first source carrying a value wins; without any indicator the
configured default version is assumed.  Parameter and header names
come from ``Settings``.

Versioned routes are declared with a ``VersionedEndpoint``: an explicit
table from ``ApiVersion`` to handler.  Routes that do not use one are
unversioned and answer every version.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from fastapi import Request

from ..core.config import Settings

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS_HEADER = "api-supported-versions"

_VERSION_PATTERN = re.compile(r"v?(?P<major>\d+)(?:\.(?P<minor>\d+))?", re.IGNORECASE)


class ApiVersionError(ValueError):
    """Base class for version negotiation failures."""

    code = "ApiVersionError"

    def __init__(self, requested: str, message: str) -> None:
        self.requested = requested
        super().__init__(message)


class InvalidApiVersionError(ApiVersionError):
    code = "InvalidApiVersion"

    def __init__(self, requested: str) -> None:
        super().__init__(requested, f"The API version '{requested}' is not a valid version.")


class UnsupportedApiVersionError(ApiVersionError):
    code = "UnsupportedApiVersion"

    def __init__(self, requested: str, path: str) -> None:
        super().__init__(
            requested,
            f"The HTTP resource '{path}' does not support the API version '{requested}'.",
        )


@dataclass(frozen=True, order=True)
class ApiVersion:
    major: int
    minor: int = 0

    @classmethod
    def parse(cls, text: str) -> "ApiVersion":
        """Parse ``major[.minor]``; a bare major version means ``.0``."""
        match = _VERSION_PATTERN.fullmatch(text.strip())
        if match is None:
            raise InvalidApiVersionError(text)
        return cls(int(match["major"]), int(match["minor"] or 0))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def media_type_parameter(header_value: str, name: str) -> Optional[str]:
    """Return parameter ``name`` from the first media range that has it."""
    for media_range in header_value.split(","):
        for parameter in media_range.split(";")[1:]:
            key, sep, value = parameter.partition("=")
            if sep and key.strip().lower() == name.lower():
                value = value.strip().strip('"')
                if value:
                    return value
    return None


def read_api_version(request: Request, settings: Settings) -> Optional[str]:
    """Return the raw version indicator of a request, if any."""
    value = request.query_params.get(settings.api_version_query_param)
    if value:
        return value
    value = request.headers.get(settings.api_version_header)
    if value:
        return value
    for header in ("content-type", "accept"):
        raw = request.headers.get(header)
        if raw:
            value = media_type_parameter(raw, settings.api_version_media_type_param)
            if value:
                return value
    return None


def select_api_version(request: Request, settings: Settings) -> ApiVersion:
    """Resolve the API version a request asks for."""
    raw = read_api_version(request, settings)
    if raw is None:
        return ApiVersion.parse(settings.default_api_version)
    return ApiVersion.parse(raw)


class VersionedEndpoint:
    """Explicit route table for an endpoint with per‑version handlers.

    Handlers are registered with ``map_to`` and looked up with
    ``select``::

        all_products = VersionedEndpoint()

        @all_products.map_to(ApiVersion(1, 0))
        def all_products_v1(store):
            ...
    """

    def __init__(self) -> None:
        self._handlers: Dict[ApiVersion, Callable] = {}

    def map_to(self, version: ApiVersion) -> Callable[[Callable], Callable]:
        def decorator(handler: Callable) -> Callable:
            if version in self._handlers:
                raise ValueError(f"API version {version} is already mapped")
            self._handlers[version] = handler
            return handler

        return decorator

    @property
    def supported_versions(self) -> List[ApiVersion]:
        return sorted(self._handlers)

    def report_headers(self) -> Dict[str, str]:
        """Headers advertising the versions this endpoint supports."""
        return {
            SUPPORTED_VERSIONS_HEADER: ", ".join(str(v) for v in self.supported_versions)
        }

    def select(self, request: Request, settings: Settings) -> Callable:
        """Return the handler registered for the requested version.

        Raises ``InvalidApiVersionError`` for a malformed indicator and
        ``UnsupportedApiVersionError`` for a version with no handler.
        """
        try:
            version = select_api_version(request, settings)
        except InvalidApiVersionError as exc:
            logger.warning("Rejected malformed API version %r on %s", exc.requested, request.url.path)
            raise
        handler = self._handlers.get(version)
        if handler is None:
            logger.warning("Rejected unsupported API version %s on %s", version, request.url.path)
            raise UnsupportedApiVersionError(str(version), request.url.path)
        return handler
