import logging
import sys

import uvicorn
from pymongo.errors import PyMongoError

from moodapi import config, database
from moodapi.main import create_app

logger = logging.getLogger("moodapi")


def main() -> None:
    config.configure_logging()

    # Storage must be reachable before any route is registered.
    try:
        database.connect()
    except PyMongoError:
        logger.exception("Error connecting to MongoDB; not starting the server")
        sys.exit(1)

    app = create_app(database.get_collection())
    logger.info("Server running on port %s", config.PORT)
    try:
        uvicorn.run(app, host=config.HOST, port=config.PORT)
    finally:
        database.close()


if __name__ == "__main__":
    main()
