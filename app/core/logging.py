"""
Process-wide logging setup. Modules log through `logging.getLogger(__name__)`;
this is called once when the API starts.
"""
import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_FORMAT,
        handlers=[logging.StreamHandler()],
    )
