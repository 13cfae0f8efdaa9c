"""Run the gateway: python -m echeck_gateway"""

import uvicorn
from echeck_gateway.config import settings
from echeck_gateway.infrastructure.database.session import create_local_schema, engine


def main() -> None:
    create_local_schema(engine)
    uvicorn.run(
        "echeck_gateway.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # JSON logging is configured by the app
    )


if __name__ == "__main__":
    main()
