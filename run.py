import logging

import uvicorn

from sitecrawl import config
from sitecrawl.api.app import create_app
from sitecrawl.container import Container

logger = logging.getLogger(__name__)


def main(container: Container = None):
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if container is None:
        container = Container()

    app = create_app(container)
    host = container.config.SITECRAWL_HOST()
    port = int(container.config.SITECRAWL_PORT())
    logger.info("SiteCrawl API listening on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == '__main__':
    main()
