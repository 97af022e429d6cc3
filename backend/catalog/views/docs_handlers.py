"""API documentation pages: OpenAPI JSON and a Swagger UI shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse

if TYPE_CHECKING:
    from starlette.requests import Request

DOCS_PATH = "/api-docs"
OPENAPI_PATH = "/api-docs/openapi.json"

_SWAGGER_UI_CDN = "https://unpkg.com/swagger-ui-dist@5"

_SWAGGER_UI_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <link rel="stylesheet" href="{cdn}/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="{cdn}/swagger-ui-bundle.js"></script>
  <script>
    window.onload = function () {{
      SwaggerUIBundle({{
        url: "{openapi_url}",
        dom_id: "#swagger-ui",
        presets: [SwaggerUIBundle.presets.apis],
      }});
    }};
  </script>
</body>
</html>
"""


async def docs_redirect(_request: Request) -> RedirectResponse:
    """GET / - send browsers to the interactive docs."""
    return RedirectResponse(DOCS_PATH)


async def openapi_document(request: Request) -> JSONResponse:
    return JSONResponse(request.app.state.openapi_spec)


async def swagger_ui(request: Request) -> HTMLResponse:
    title = request.app.state.openapi_spec["info"]["title"]
    return HTMLResponse(_SWAGGER_UI_PAGE.format(title=title, cdn=_SWAGGER_UI_CDN, openapi_url=OPENAPI_PATH))
