from abc import ABC, abstractmethod
from typing import Any, BinaryIO, TextIO

from mypy_extensions import trait

# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class InvalidArgument(ValueError):
	"""Raised when a response operation is given an argument it can't accept,
	such as a missing response to wrap."""

	def __init__(self, message: str):
		super().__init__(message)
		self.message: str = message


class ResponseCommitted(RuntimeError):
	"""Raised by responses when an operation is not allowed anymore because
	the head has already been sent."""

	def __init__(self, message: str = "Response is already committed"):
		super().__init__(message)
		self.message: str = message


class OutputConflict(RuntimeError):
	"""Raised when both the byte stream and the text writer of a response
	are requested."""

	def __init__(self, message: str):
		super().__init__(message)
		self.message: str = message


# -----------------------------------------------------------------------------
#
# CAPABILITY SET
#
# -----------------------------------------------------------------------------

RESPONSE_OPERATIONS: tuple[str, ...] = (
	"setCharacterEncoding",
	"getCharacterEncoding",
	"getOutputStream",
	"getWriter",
	"setContentLength",
	"setContentLengthLong",
	"setContentType",
	"getContentType",
	"setBufferSize",
	"getBufferSize",
	"flushBuffer",
	"isCommitted",
	"reset",
	"resetBuffer",
	"setLocale",
	"getLocale",
)


@trait
class Response(ABC):
	"""The set of operations an object must support to be treated as
	a response. Classes that don't inherit from `Response` but implement
	all of its operations are considered subclasses as well."""

	@classmethod
	def __subclasshook__(cls, other: type) -> Any:
		if cls is Response:
			mro = other.__mro__
			for name in RESPONSE_OPERATIONS:
				for base in mro:
					if name in base.__dict__:
						if base.__dict__[name] is None:
							return NotImplemented
						break
				else:
					return NotImplemented
			return True
		return NotImplemented

	@abstractmethod
	def setCharacterEncoding(self, charset: str | None) -> None: ...

	@abstractmethod
	def getCharacterEncoding(self) -> str: ...

	@abstractmethod
	def getOutputStream(self) -> BinaryIO:
		"""Returns the binary stream the body is written to."""

	@abstractmethod
	def getWriter(self) -> TextIO:
		"""Returns a text stream that encodes the body using the character
		encoding."""

	@abstractmethod
	def setContentLength(self, length: int) -> None: ...

	@abstractmethod
	def setContentLengthLong(self, length: int) -> None: ...

	@abstractmethod
	def setContentType(self, type: str | None) -> None: ...

	@abstractmethod
	def getContentType(self) -> str | None: ...

	@abstractmethod
	def setBufferSize(self, size: int) -> None: ...

	@abstractmethod
	def getBufferSize(self) -> int: ...

	@abstractmethod
	def flushBuffer(self) -> None:
		"""Sends the buffered content, committing the response."""

	@abstractmethod
	def isCommitted(self) -> bool: ...

	@abstractmethod
	def reset(self) -> None:
		"""Clears the buffer along with the status and headers."""

	@abstractmethod
	def resetBuffer(self) -> None:
		"""Clears the buffer, keeping status and headers."""

	@abstractmethod
	def setLocale(self, locale: str) -> None: ...

	@abstractmethod
	def getLocale(self) -> str: ...


# EOF
