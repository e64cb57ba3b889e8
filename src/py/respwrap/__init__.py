from .model import (
	Response,
	InvalidArgument,
	ResponseCommitted,
	OutputConflict,
)  # NOQA: F401
from .wrapper import ResponseWrapper  # NOQA: F401
from .buffered import BufferedResponse  # NOQA: F401


# EOF
