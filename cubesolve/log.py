import logging

LOGGER = logging.getLogger("cubesolve")
