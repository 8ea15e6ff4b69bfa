"""Logger setup shared by the whole service."""
import logging

LOGGER_NAME = "miremover_api"


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Configure the service logger once; later calls only adjust the level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # avoid duplicate handlers on app re-creation (tests, reload)
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(console_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. get_logger(__name__) -> miremover_api.services.identity."""
    if name.startswith(LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
