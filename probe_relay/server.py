import uvicorn

from probe_relay.config import settings
from probe_relay.logging_config import build_logging_config, setup_logging


def main() -> None:
    setup_logging()
    uvicorn.run(
        "probe_relay.main:app",
        host=settings.RELAY_HOST,
        port=settings.PORT,
        log_config=build_logging_config(),
    )


if __name__ == "__main__":
    main()
