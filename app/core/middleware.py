"""
CORS middleware for the student resource
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Stamps JSON content type and permissive CORS headers on every response
    under `resource_prefix`, and answers preflight (OPTIONS) requests there
    with an empty 200 without reaching the routes.

    Unlike Starlette's CORSMiddleware the headers are sent whether or not
    the request carries an Origin header.
    """

    ALLOW_METHODS = "GET, POST, OPTIONS, PUT, DELETE"
    ALLOW_HEADERS = "Content-Type"

    def __init__(self, app, resource_prefix: str, allow_origin: str = "*"):
        super().__init__(app)
        self.resource_prefix = resource_prefix.rstrip("/")
        self.allow_origin = allow_origin

    async def dispatch(self, request: Request, call_next):
        if not self._is_resource_path(request.url.path):
            return await call_next(request)

        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        response.headers["Content-Type"] = "application/json"
        response.headers["Access-Control-Allow-Origin"] = self.allow_origin
        response.headers["Access-Control-Allow-Methods"] = self.ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = self.ALLOW_HEADERS
        return response

    def _is_resource_path(self, path: str) -> bool:
        # Collection path or any item path below it
        return path == self.resource_prefix or path.startswith(self.resource_prefix + "/")
