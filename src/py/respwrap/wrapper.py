from typing import Any, BinaryIO, TextIO, get_origin

from . import config
from .model import Response, InvalidArgument
from .utils.logging import debug

# -----------------------------------------------------------------------------
#
# RESPONSE WRAPPER
#
# -----------------------------------------------------------------------------


class ResponseWrapper(Response):
	"""Decorates a response: every operation defaults to calling through to
	the wrapped response, so that subclasses only override what they need
	to adapt.

	For instance, to force a content type on any response:

	>    class PlainText(ResponseWrapper):
	>        def setContentType(self, type):
	>            super().setContentType("text/plain")

	Wrappers can wrap other wrappers, `isWrapperFor` walks the whole chain.
	"""

	__slots__ = ["_wrapped"]

	def __init__(self, wrapped: Response):
		if wrapped is None:
			raise InvalidArgument("Response cannot be None")
		self._wrapped: Response = wrapped

	@property
	def wrapped(self) -> Response:
		return self._wrapped

	def getWrapped(self) -> Response:
		"""Returns the wrapped response."""
		return self._wrapped

	def setWrapped(self, wrapped: Response) -> "ResponseWrapper":
		"""Replaces the wrapped response, subsequent operations are forwarded
		to `wrapped`."""
		if wrapped is None:
			raise InvalidArgument("Response cannot be None")
		if config.LOG_WRAPPING:
			debug(
				"Replacing wrapped response",
				Wrapper=self.__class__.__name__,
				Previous=self._wrapped.__class__.__name__,
				Current=wrapped.__class__.__name__,
			)
		self._wrapped = wrapped
		return self

	# =========================================================================
	# DELEGATION
	# =========================================================================

	def setCharacterEncoding(self, charset: str | None) -> None:
		self._wrapped.setCharacterEncoding(charset)

	def getCharacterEncoding(self) -> str:
		return self._wrapped.getCharacterEncoding()

	def getOutputStream(self) -> BinaryIO:
		return self._wrapped.getOutputStream()

	def getWriter(self) -> TextIO:
		return self._wrapped.getWriter()

	def setContentLength(self, length: int) -> None:
		self._wrapped.setContentLength(length)

	def setContentLengthLong(self, length: int) -> None:
		self._wrapped.setContentLengthLong(length)

	def setContentType(self, type: str | None) -> None:
		self._wrapped.setContentType(type)

	def getContentType(self) -> str | None:
		return self._wrapped.getContentType()

	def setBufferSize(self, size: int) -> None:
		self._wrapped.setBufferSize(size)

	def getBufferSize(self) -> int:
		return self._wrapped.getBufferSize()

	def flushBuffer(self) -> None:
		self._wrapped.flushBuffer()

	def isCommitted(self) -> bool:
		return self._wrapped.isCommitted()

	def reset(self) -> None:
		self._wrapped.reset()

	def resetBuffer(self) -> None:
		self._wrapped.resetBuffer()

	def setLocale(self, locale: str) -> None:
		self._wrapped.setLocale(locale)

	def getLocale(self) -> str:
		return self._wrapped.getLocale()

	# =========================================================================
	# INTROSPECTION
	# =========================================================================

	def isWrapperFor(self, target: Any) -> bool:
		"""Tells if this wrapper wraps (directly or through other wrappers)
		the given response instance, or a response of the given type.

		Parameterized aliases such as `list[int]` are treated as types, and
		so are rejected with `InvalidArgument`."""
		if isinstance(target, type) or get_origin(target) is not None:
			return self.isWrapperForType(target)
		else:
			return self.isWrapperForInstance(target)

	def isWrapperForInstance(self, target: Response) -> bool:
		# NOTE: A cyclic chain of wrappers would loop forever.
		current: Response = self._wrapped
		while True:
			if current is target:
				return True
			elif isinstance(current, ResponseWrapper):
				current = current._wrapped
			else:
				return False

	def isWrapperForType(self, target: type) -> bool:
		# Aliases like `list[int]` pass `isinstance(_, type)` on older Pythons
		if (
			get_origin(target) is not None
			or not isinstance(target, type)
			or not issubclass(target, Response)
		):
			name: str = getattr(target, "__qualname__", repr(target))
			raise InvalidArgument(
				f"Given class {name} not a subtype of {Response.__qualname__}"
			)
		current: Response = self._wrapped
		while True:
			if isinstance(current, target):
				return True
			elif isinstance(current, ResponseWrapper):
				current = current._wrapped
			else:
				return False

	def __str__(self) -> str:
		return f"{self.__class__.__name__}({self._wrapped})"


# EOF
