import logging

import uvicorn

from larder.api.api_run import app
from larder.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logging.getLogger("larder_app").info("Larder API listening on http://localhost:%d", APP_PORT)
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    main()
