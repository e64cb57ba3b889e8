from os import getenv
from .utils.io import DEFAULT_ENCODING  # NOQA: F401

# Default size of the buffer allocated by `BufferedResponse`
BUFFER_SIZE: int = int(getenv("RESPWRAP_BUFFER_SIZE", 8192))

LOCALE: str = getenv("RESPWRAP_LOCALE", "en_US")

# Logs every replacement of a wrapped response
LOG_WRAPPING: bool = getenv("RESPWRAP_LOG_WRAPPING", "0") == "1"

LOG_LEVEL: str = getenv("RESPWRAP_LOG_LEVEL", "Info")

# EOF
