import logging
import sys


def setup_logging(level=logging.INFO, format_string='%(asctime)s - %(name)s - %(levelname)s - %(message)s'):
    """Configures basic logging to stdout."""
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stdout  # Explicitly set stream to stdout
    )


# Library modules log through children of this logger.
logger = logging.getLogger("symbolic_decompose")
logger.addHandler(logging.NullHandler())
