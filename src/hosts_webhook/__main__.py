"""Entry point for running the provider directly."""

import uvicorn

from hosts_webhook.core.config import get_settings


def main():
    """Run the webhook provider on the configured address and port."""
    settings = get_settings()

    uvicorn.run(
        "hosts_webhook.app:app",
        host=settings.listen_address,
        port=settings.port,
        log_level="warning",
    )


if __name__ == "__main__":
    main()
