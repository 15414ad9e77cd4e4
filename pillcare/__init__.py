import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

def setup_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)
