"""OpenAPI document assembly.

The base document comes from validated top-level configuration; each
registered controller then merges its operation objects and shared
components into it. Usage::

    document = build_base_document({
        "title": "Shop", "version": "1.0.0",
        "description": "Shop API", "servers": [{"url": "/api"}],
    })
"""

from barabara.openapi.document import (
    OPENAPI_VERSION,
    OpenAPIDocument,
    build_base_document,
    validate_openapi_config,
)

__all__ = ["OPENAPI_VERSION", "OpenAPIDocument", "build_base_document", "validate_openapi_config"]
