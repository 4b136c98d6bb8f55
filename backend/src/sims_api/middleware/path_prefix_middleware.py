"""Strip the mount prefix added by a serverless function gateway."""

from starlette.types import ASGIApp, Receive, Scope, Send


class PathPrefixMiddleware:
    """Rewrite ``<prefix>/api/...`` to ``/api/...``.

    Function gateways such as Netlify forward requests as
    ``/.netlify/functions/api/api/login``. Requests without the prefix pass
    through untouched, so the same app also runs behind a plain server.
    """

    def __init__(self, app: ASGIApp, prefix: str) -> None:
        self.app = app
        self.prefix = prefix.rstrip("/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket") and self.prefix:
            path: str = scope["path"]
            if path == self.prefix or path.startswith(self.prefix + "/"):
                scope = dict(scope)
                scope["path"] = path[len(self.prefix):] or "/"
                scope["raw_path"] = scope["path"].encode("utf-8")
        await self.app(scope, receive, send)
