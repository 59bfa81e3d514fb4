"""Core components for effectcenter.

This module exposes the primary types and utilities:

Types:
    Effect: Immutable, validated description of a ui effect with debug properties.
    SendEffect: Fire-and-forget effect.
    RequestEffect: Awaitable effect whose outcome settles exactly once.
    Outcome: Settle-once result cell, awaitable any number of times.
    Handler: Abstract base class for effect consumers.
    EffectCenter: Process-wide dispatcher routing effects to the first registered handler.
    CenterStats: Statistics dataclass from an EffectCenter.

Failure Handling:
    MissingHandlerMode: Enum for dispatching without a handler (FAIL, IGNORE).
    NoHandlerRegisteredError: Raised when dispatching without a handler in FAIL mode.
    HandlerRegistrationError: Raised on double registration or stray deregistration.
    MultipleHandlersWarning: Warned when more than one handler is registered.
    OutcomeAlreadySettledError: Raised when an outcome is settled twice.
    HandlerDisposedError: Settled into outcomes cancelled by dispose().
"""

from effectcenter.core.center import (
    CenterStats,
    EffectCenter,
    HandlerRegistrationError,
    MissingHandlerMode,
    MultipleHandlersWarning,
    NoHandlerRegisteredError,
)
from effectcenter.core.effect import (
    CALLER_KEY,
    Effect,
    RequestEffect,
    SendEffect,
    build_debug_properties,
)
from effectcenter.core.handler import Handler, HandlerDisposedError
from effectcenter.core.outcome import Outcome, OutcomeAlreadySettledError

__all__ = [
    "Effect",
    "SendEffect",
    "RequestEffect",
    "CALLER_KEY",
    "build_debug_properties",
    "Outcome",
    "Handler",
    "EffectCenter",
    "CenterStats",
    "MissingHandlerMode",
    "NoHandlerRegisteredError",
    "HandlerRegistrationError",
    "MultipleHandlersWarning",
    "OutcomeAlreadySettledError",
    "HandlerDisposedError",
]
