"""Lifespan management with event-based architecture for robyn-file-uploader."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from typing import Any, Generic, TypeVar

from robyn import Robyn

from uploader.core.logger import LogIcon, logger
from uploader.core.settings import Settings

AsyncHandler = Callable[[], Coroutine[Any, Any, None]]

T = TypeVar("T")


class State:
    """Application state shared with handlers through global dependencies."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        object.__setattr__(self, "_data", {})

    def __getattr__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"State has no attribute '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def __repr__(self) -> str:
        return f"State({self._data})"

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def clear(self) -> None:
        self._data.clear()


class BaseEvent(ABC, Generic[T]):
    """A resource built at startup from explicit settings and kept in the state."""

    name: str

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @abstractmethod
    async def startup(self) -> T:
        """Build and return the resource."""
        ...

    async def shutdown(self, instance: T) -> None:  # noqa: B027
        """Optional cleanup. Override if cleanup is needed."""

    @classmethod
    def has_shutdown(cls) -> bool:
        return cls.shutdown is not BaseEvent.shutdown


class Lifespan:
    """Runs registered events on startup and tears them down in reverse on shutdown."""

    def __init__(self, app: Robyn, settings: Settings) -> None:
        self._app = app
        self._settings = settings
        self._event_classes: list[type[BaseEvent[Any]]] = []
        self._events: list[BaseEvent[Any]] = []
        self._state = State()

    def register(self, event_cls: type[BaseEvent[Any]]) -> "Lifespan":
        """Register an event class. Returns self for chaining."""
        self._event_classes.append(event_cls)
        return self

    @property
    def state(self) -> State:
        return self._state

    @property
    def events(self) -> list[BaseEvent[Any]]:
        return self._events

    async def run_startup(self) -> None:
        logger.info("Starting application lifespan", icon=LogIcon.START, version=self._settings.API_VERSION)

        for event_cls in self._event_classes:
            event = event_cls(self._settings)
            logger.info(f"Starting event: {event.name}", icon=LogIcon.PROCESSING)
            setattr(self._state, event.name, await event.startup())
            self._events.append(event)
            logger.info(f"Event ready: {event.name}", icon=LogIcon.SUCCESS)

        logger.info("App state ready", icon=LogIcon.COMPLETE)

    async def run_shutdown(self) -> None:
        logger.info("Cleaning up app state", icon=LogIcon.TOOL)

        for event in reversed(self._events):
            if event.has_shutdown() and event.name in self._state:
                await event.shutdown(getattr(self._state, event.name))
                logger.info(f"Shutdown complete: {event.name}", icon=LogIcon.SUCCESS)

        self._events.clear()
        self._state.clear()

    def attach(self) -> "Lifespan":
        """Hook startup/shutdown into the app and expose the state to handlers."""
        self._app.inject_global(state=self._state)
        self._app.startup_handler(self.run_startup)
        self._app.shutdown_handler(self.run_shutdown)
        return self


def create_lifespan(app: Robyn, settings: Settings) -> Lifespan:
    return Lifespan(app, settings)
