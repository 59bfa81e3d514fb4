"""Console counter demo entrypoint.

The counter only increments after the user confirms a dialog, and reports
the result with a toast. The counting logic only talks to ConsoleEffects;
the ConsoleSurface is owned by the ContextHandler mounted in main().

Usage:
    python -m effectcenter.apps.console.main
"""

import asyncio

from effectcenter.apps.console.effects import ConsoleEffects
from effectcenter.apps.console.surface import ConsoleSurface, ToastType
from effectcenter.handlers.context import ContextHandler


async def increment_counter(ui: ConsoleEffects, counter: int) -> int:
    """Ask for confirmation and return the new counter value."""
    allowed = await ui.show_dialog(
        "Are you sure that you want to increment the counter?",
        {"yes": True, "no": False},
        result_type=bool,
    )

    if allowed:
        counter += 1
        ui.show_toast(f"Incremented counter to {counter}", ToastType.SUCCESS)
    else:
        ui.show_toast("Did not increment counter", ToastType.NEUTRAL)
    return counter


async def run_counter(rounds: int = 3, ui: ConsoleEffects | None = None) -> int:
    """Run ``rounds`` increment attempts and return the final counter value."""
    ui = ui or ConsoleEffects()
    ui.show_banner("effectcenter counter demo")
    counter = 0
    for _ in range(rounds):
        counter = await increment_counter(ui, counter)
    return counter


async def _main() -> int:
    with ContextHandler(ConsoleSurface()):
        return await run_counter()


def main() -> None:
    """Main entry point for the console counter demo."""
    counter = asyncio.run(_main())
    print(f"\nFinal counter: {counter}")


if __name__ == "__main__":
    main()
