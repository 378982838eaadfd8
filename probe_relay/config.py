import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    CHECK_HOST_BASE_URL: str = os.getenv(
        "CHECK_HOST_BASE_URL", "https://check-host.net"
    )
    CHECK_HOST_NODE_ID: str = os.getenv(
        "CHECK_HOST_NODE_ID", "sg1.node.check-host.net"
    )
    CHECK_SUBMIT_TIMEOUT_S: float = float(os.getenv("CHECK_SUBMIT_TIMEOUT_S", "8"))
    CHECK_RESULT_TIMEOUT_S: float = float(os.getenv("CHECK_RESULT_TIMEOUT_S", "5"))
    CHECK_POLL_INITIAL_DELAY_S: float = float(
        os.getenv("CHECK_POLL_INITIAL_DELAY_S", "2.5")
    )
    CHECK_POLL_INTERVAL_S: float = float(os.getenv("CHECK_POLL_INTERVAL_S", "1.5"))
    CHECK_POLL_MAX_ATTEMPTS: int = int(os.getenv("CHECK_POLL_MAX_ATTEMPTS", 6))
    # Reported as the latency of a check whose result never arrived.
    CHECK_TIMEOUT_LATENCY_MS: int = int(os.getenv("CHECK_TIMEOUT_LATENCY_MS", 6000))
    CORS_ALLOW_ORIGINS: tuple[str, ...] = tuple(
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    )
    RELAY_HOST: str = os.getenv("RELAY_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 3000))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
