"""Console demo: a text render surface and the convenience layer that targets it."""

from effectcenter.apps.console.effects import ConsoleEffects
from effectcenter.apps.console.surface import ConsoleSurface, ToastAlignment, ToastType

__all__ = ["ConsoleEffects", "ConsoleSurface", "ToastAlignment", "ToastType"]
