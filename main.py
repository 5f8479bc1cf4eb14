from aiohttp import web

from api.server import create_app
from config.constants import DEFAULT_SERVER_HOST, SERVER_PORT
from utils.logging_config import configure_logging


def main() -> None:
    configure_logging()
    web.run_app(create_app(), host=DEFAULT_SERVER_HOST, port=SERVER_PORT)


if __name__ == "__main__":
    main()
