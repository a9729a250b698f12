import logging

logger = logging.getLogger("colorline")
logger.setLevel(logging.INFO)
