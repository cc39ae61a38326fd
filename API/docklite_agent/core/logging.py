import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # The Docker SDK logs every HTTP request at DEBUG through urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)
