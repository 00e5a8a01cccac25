"""Base middleware architecture for Robyn applications."""

from collections.abc import Callable

from robyn import Request, Response, Robyn

from uploader.core.logger import LogIcon, logger


class BaseMiddleware:
    """Base class for middlewares; only the hooks a subclass overrides get registered."""

    endpoints: frozenset[str] = frozenset()

    def __init__(self, endpoints: frozenset[str] | list[str] | None = None) -> None:
        if endpoints:
            self.endpoints = frozenset(endpoints)

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls.before is BaseMiddleware.before and cls.after is BaseMiddleware.after:
            raise TypeError(f"{cls.__name__} must implement at least one of before/after")

    def before(self, request: Request) -> Request | Response:
        """Called before request handling. Return Request to continue or Response to short-circuit."""
        return request

    def after(self, response: Response) -> Response:
        """Called after request handling. Return modified Response."""
        return response

    def has_before(self) -> bool:
        return type(self).before is not BaseMiddleware.before

    def has_after(self) -> bool:
        return type(self).after is not BaseMiddleware.after


class MiddlewareHandler:
    """Manages middleware registration for a Robyn application."""

    def __init__(self, app: Robyn) -> None:
        self._app = app
        self._middlewares: list[BaseMiddleware] = []

    def register(self, middleware: BaseMiddleware) -> "MiddlewareHandler":
        """Register a middleware instance on its endpoints. Returns self for chaining."""
        if not middleware.endpoints:
            raise ValueError(f"{middleware.__class__.__name__} declares no endpoints")

        self._middlewares.append(middleware)
        for endpoint in middleware.endpoints:
            if middleware.has_before():
                self._register_before(endpoint, middleware.before)
            if middleware.has_after():
                self._register_after(endpoint, middleware.after)

        logger.info(f"Registered middleware: {middleware.__class__.__name__}", icon=LogIcon.ADAPTER)
        return self

    def _register_before(self, endpoint: str, handler: Callable) -> None:
        @self._app.before_request(endpoint)
        async def before_wrapper(request: Request) -> Request | Response:
            return handler(request)

    def _register_after(self, endpoint: str, handler: Callable) -> None:
        @self._app.after_request(endpoint)
        def after_wrapper(response: Response) -> Response:
            return handler(response)
