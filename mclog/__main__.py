import asyncio
import contextlib

from .config import load_settings
from .events import BaseEvent, EventDispatcher, EventType
from .log_monitor import LogMonitor
from .logger import configure_logging, logger


def log_event(event: BaseEvent) -> None:
    payload = event.model_dump(exclude={"event_type", "timestamp"})
    logger.info(f"{event.event_type.value}: {payload}")


async def main() -> None:
    settings = load_settings()
    configure_logging(settings)

    dispatcher = EventDispatcher()
    for event_type in EventType:
        dispatcher.on(event_type, log_event)

    monitor = LogMonitor.from_settings(settings, event_dispatcher=dispatcher)
    await monitor.start()
    try:
        await asyncio.Event().wait()
    finally:
        await monitor.close()


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
