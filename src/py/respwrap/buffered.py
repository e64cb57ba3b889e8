import io
from http import HTTPStatus
from typing import BinaryIO, Literal

from . import config
from .model import Response, InvalidArgument, ResponseCommitted, OutputConflict
from .utils.io import HTTP_ENCODING, asBytes, splitContentType
from .utils.logging import debug, warning

TOutput = Literal["stream", "writer"]

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	key: str = name.lower()
	if key not in headers:
		headers[key] = "-".join(_.capitalize() for _ in key.split("-"))
	return headers[key]


def statusMessage(status: int) -> str:
	try:
		return HTTPStatus(status).phrase
	except ValueError:
		return "Unknown status"


# -----------------------------------------------------------------------------
#
# OUTPUT
#
# -----------------------------------------------------------------------------


class ResponseStream(io.RawIOBase):
	"""The binary stream of a `BufferedResponse`. Bytes go to the response
	buffer, which is only sent when full or on `flushBuffer()`."""

	def __init__(self, response: "BufferedResponse"):
		super().__init__()
		self.response: BufferedResponse = response

	def writable(self) -> bool:
		return True

	def write(self, data: bytes | bytearray | memoryview) -> int:  # type: ignore[override]
		if self.closed:
			raise ValueError("I/O operation on closed response stream")
		chunk: bytes = bytes(data)
		self.response.write(chunk)
		return len(chunk)


class ResponseWriter(io.TextIOBase):
	"""The text stream of a `BufferedResponse`, encoding text with the
	response's character encoding."""

	def __init__(self, response: "BufferedResponse"):
		super().__init__()
		self.response: BufferedResponse = response

	@property
	def encoding(self) -> str:  # type: ignore[override]
		return self.response.getCharacterEncoding()

	def writable(self) -> bool:
		return True

	def write(self, text: str) -> int:
		if self.closed:
			raise ValueError("I/O operation on closed response writer")
		# Characters the charset can't encode are replaced by `?`
		self.response.write(asBytes(text, self.encoding, "replace"))
		return len(text)


# -----------------------------------------------------------------------------
#
# BUFFERED RESPONSE
#
# -----------------------------------------------------------------------------


class BufferedResponse(Response):
	"""An in-memory response that buffers its body and sends it, head first,
	to a `sink` binary stream once committed. The response is committed
	when the buffer overflows or when `flushBuffer()` is called, after which
	the head can't be changed anymore."""

	def __init__(
		self,
		sink: BinaryIO | None = None,
		*,
		status: int = 200,
		bufferSize: int | None = None,
		protocol: str = "HTTP/1.1",
	):
		self.sink: BinaryIO = io.BytesIO() if sink is None else sink
		self.protocol: str = protocol
		self.status: int = status
		self.message: str | None = None
		self.headers: dict[str, str] = {}
		self.bufferSize: int = config.BUFFER_SIZE if bufferSize is None else bufferSize
		self.buffer: bytearray = bytearray()
		self.committed: bool = False
		self.characterEncoding: str | None = None
		self.mimeType: str | None = None
		self.locale: str = config.LOCALE
		self.output: TOutput | None = None
		self._stream: ResponseStream | None = None
		self._writer: ResponseWriter | None = None

	# =========================================================================
	# HEAD
	# =========================================================================

	def setStatus(self, status: int, message: str | None = None) -> "BufferedResponse":
		if self._ignored("setStatus"):
			return self
		self.status = status
		self.message = message
		return self

	def getHeader(self, name: str) -> str | None:
		return self.headers.get(headername(name))

	def setHeader(self, name: str, value: str | int | None) -> "BufferedResponse":
		if self._ignored("setHeader"):
			return self
		key: str = headername(name)
		if value is None:
			self.headers.pop(key, None)
		else:
			self.headers[key] = str(value)
		return self

	def head(self) -> bytes:
		"""Serializes the status line and headers as a payload."""
		lines: list[str] = [f"{k}: {v}" for k, v in self.headers.items()]
		lines.insert(
			0, f"{self.protocol} {self.status} {self.message or statusMessage(self.status)}"
		)
		lines.append("")
		lines.append("")
		return "\r\n".join(lines).encode("ascii")

	def setCharacterEncoding(self, charset: str | None) -> None:
		# The charset can't change once a writer has started encoding
		if self._ignored("setCharacterEncoding") or self.output == "writer":
			return
		self.characterEncoding = charset
		self._updateContentType()

	def getCharacterEncoding(self) -> str:
		return self.characterEncoding or HTTP_ENCODING

	def setContentType(self, type: str | None) -> None:
		if self._ignored("setContentType"):
			return
		if type is None:
			self.mimeType = None
		else:
			mime, charset = splitContentType(type)
			self.mimeType = mime
			if charset and self.output != "writer":
				self.characterEncoding = charset
		self._updateContentType()

	def getContentType(self) -> str | None:
		if self.mimeType is None:
			return None
		elif self.characterEncoding:
			return f"{self.mimeType};charset={self.characterEncoding}"
		else:
			return self.mimeType

	def setContentLength(self, length: int) -> None:
		self.setContentLengthLong(length)

	def setContentLengthLong(self, length: int) -> None:
		if self._ignored("setContentLength"):
			return
		self.headers["Content-Length"] = str(length)

	def setLocale(self, locale: str) -> None:
		if self._ignored("setLocale"):
			return
		self.locale = locale
		self.headers["Content-Language"] = locale.replace("_", "-")

	def getLocale(self) -> str:
		return self.locale

	# =========================================================================
	# BODY
	# =========================================================================

	def getOutputStream(self) -> ResponseStream:
		if self.output == "writer":
			raise OutputConflict("getWriter() has already been called for this response")
		self.output = "stream"
		if self._stream is None:
			self._stream = ResponseStream(self)
		return self._stream

	def getWriter(self) -> ResponseWriter:
		if self.output == "stream":
			raise OutputConflict(
				"getOutputStream() has already been called for this response"
			)
		self.output = "writer"
		if self._writer is None:
			self._writer = ResponseWriter(self)
		return self._writer

	def write(self, data: bytes) -> int:
		"""Appends the data to the buffer, flushing it when it overflows."""
		if not data:
			return 0
		self.buffer += data
		if len(self.buffer) > self.bufferSize:
			self.flushBuffer()
		return len(data)

	def setBufferSize(self, size: int) -> None:
		if self.committed or self.buffer:
			raise ResponseCommitted(
				"Buffer size can't be changed once content has been written"
			)
		if size < 0:
			raise InvalidArgument(f"Buffer size can't be negative: {size}")
		self.bufferSize = size

	def getBufferSize(self) -> int:
		return self.bufferSize

	def flushBuffer(self) -> None:
		if not self.committed:
			# The head is built first, a failing head leaves the response uncommitted
			head: bytes = self.head()
			self.sink.write(head)
			self.committed = True
			debug(
				"Response committed",
				Status=self.status,
				ContentType=self.getContentType(),
				Buffered=len(self.buffer),
			)
		if self.buffer:
			self.sink.write(bytes(self.buffer))
			self.buffer.clear()
		self.sink.flush()

	def isCommitted(self) -> bool:
		return self.committed

	def reset(self) -> None:
		if self.committed:
			raise ResponseCommitted("Response can't be reset once committed")
		self.buffer.clear()
		self.headers.clear()
		self.status = 200
		self.message = None
		self.mimeType = None
		self.characterEncoding = None
		self.locale = config.LOCALE
		self.output = None
		self._stream = None
		self._writer = None

	def resetBuffer(self) -> None:
		if self.committed:
			raise ResponseCommitted("Response buffer can't be reset once committed")
		self.buffer.clear()

	def sent(self) -> bytes:
		"""Returns what has been sent so far, when the sink is in memory."""
		if isinstance(self.sink, io.BytesIO):
			return self.sink.getvalue()
		raise RuntimeError(f"Response sink is not in memory: {self.sink}")

	# =========================================================================
	# INTERNALS
	# =========================================================================

	def _updateContentType(self) -> None:
		value: str | None = self.getContentType()
		if value is None:
			self.headers.pop("Content-Type", None)
		else:
			self.headers["Content-Type"] = value

	def _ignored(self, operation: str) -> bool:
		if self.committed:
			warning("Response already committed, ignoring", Operation=operation)
			return True
		return False

	def __str__(self) -> str:
		return f"BufferedResponse({self.protocol} {self.status} {self.getContentType()} committed={self.committed})"


# EOF
