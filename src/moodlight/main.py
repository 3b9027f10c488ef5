"""
Main entry point for the mood light.

Loads settings, configures logging and runs the pygame simulator.
"""

import asyncio
import logging
import sys


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator() -> None:
    """Run the desktop simulator."""
    from moodlight.config.settings import get_settings
    from moodlight.controller import MoodLightController
    from moodlight.core.scheduler import AsyncioScheduler
    from moodlight.simulator.window import SimulatorWindow, WindowConfig

    settings = get_settings()
    controller = MoodLightController(
        settings=settings,
        scheduler=AsyncioScheduler(asyncio.get_running_loop()),
    )
    window = SimulatorWindow(
        controller=controller,
        config=WindowConfig.from_settings(settings.simulator),
    )

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    load_dotenv()

    from moodlight.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Mood light starting...")

    try:
        asyncio.run(run_simulator())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Mood light stopped")


if __name__ == "__main__":
    main()
