"""worldclock — a terminal dashboard of large block-digit world clocks."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
