"""Effect models for effectcenter."""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr

from effectcenter.core.outcome import Outcome

T = TypeVar("T")

# Key under which convenience wrappers record their own name
CALLER_KEY = "caller"


class Effect(BaseModel):
    """Immutable description of a ui effect to perform.

    An effect carries a callback that a handler invokes with its render
    context, and a map of debug properties that inspectable handlers expose
    to tests. Effects are:
    - Immutable (frozen after creation)
    - Validated (debug property keys must be strings)
    - Ordered (debug properties keep the caller's insertion order)

    Attributes:
        id: UUID v4 string, auto-generated, used to correlate log records.
        created_at: UTC datetime, auto-generated.
        debug_properties: Diagnostic metadata supplied by the caller.
    """

    kind: ClassVar[str] = "effect"

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    debug_properties: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    @property
    def caller(self) -> str | None:
        """Name of the convenience wrapper that built this effect, if recorded."""
        return self.debug_properties.get(CALLER_KEY)

    def __str__(self) -> str:
        props = ", ".join(f"{key}={value}" for key, value in self.debug_properties.items())
        return f"{type(self).__name__}({props})"


class SendEffect(Effect):
    """Fire-and-forget effect.

    The handler invokes ``callback`` with its render context; nothing observes
    the completion.
    """

    kind: ClassVar[str] = "send"

    callback: Callable[[Any], Any]


class RequestEffect(Effect, Generic[T]):
    """Awaitable effect that eventually settles with a value of type ``T``.

    Parametrise the class to declare the result type, e.g.
    ``RequestEffect[bool](callback=..., debug_properties={...})``. The
    declared type is what inspectable handlers match stubs against.
    """

    kind: ClassVar[str] = "request"

    callback: Callable[[Any], Any]

    _outcome: Outcome = PrivateAttr(default_factory=Outcome)

    @property
    def outcome(self) -> Outcome:
        """The settle-once cell holding this effect's result."""
        return self._outcome

    @property
    def result_type(self) -> Any:
        """The declared result type, ``object`` when the class is unparametrised."""
        args = type(self).__pydantic_generic_metadata__["args"]
        return args[0] if args else object

    def settle(self, value: T | None) -> None:
        self._outcome.settle(value)

    def settle_error(self, error: BaseException) -> None:
        self._outcome.settle_error(error)


def build_debug_properties(
    caller: str,
    properties: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the ordered debug property map for an effect.

    The ``caller`` tag comes first, then the wrapper's own properties, then
    any overrides supplied by the wrapper's caller. An override replaces the
    value of an existing key while keeping that key's position.

    Args:
        caller: Name of the convenience wrapper building the effect.
        properties: Properties describing the wrapper's arguments.
        overrides: Extra properties supplied by the wrapper's caller.
    """
    result: dict[str, Any] = {CALLER_KEY: caller}
    result.update(properties or {})
    result.update(overrides or {})
    return result
