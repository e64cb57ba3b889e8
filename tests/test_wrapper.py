import io
import pytest

from respwrap import (
	Response,
	ResponseWrapper,
	BufferedResponse,
	InvalidArgument,
	ResponseCommitted,
)


class FakeResponse(Response):
	"""Records every call and returns canned values."""

	def __init__(self, bufferSize: int = 8192):
		self.calls: list[tuple[str, tuple]] = []
		self.bufferSize = bufferSize
		self.stream = io.BytesIO()
		self.writer = io.StringIO()

	def _call(self, name: str, *args):
		self.calls.append((name, args))

	def setCharacterEncoding(self, charset):
		self._call("setCharacterEncoding", charset)

	def getCharacterEncoding(self):
		return "UTF-8"

	def getOutputStream(self):
		return self.stream

	def getWriter(self):
		return self.writer

	def setContentLength(self, length):
		self._call("setContentLength", length)

	def setContentLengthLong(self, length):
		self._call("setContentLengthLong", length)

	def setContentType(self, type):
		self._call("setContentType", type)

	def getContentType(self):
		return "text/html"

	def setBufferSize(self, size):
		self._call("setBufferSize", size)

	def getBufferSize(self):
		return self.bufferSize

	def flushBuffer(self):
		raise OSError("Connection reset")

	def isCommitted(self):
		return False

	def reset(self):
		self._call("reset")

	def resetBuffer(self):
		self._call("resetBuffer")

	def setLocale(self, locale):
		self._call("setLocale", locale)

	def getLocale(self):
		return "fr_FR"


class DuckResponse:
	"""Implements every response operation without inheriting from `Response`."""

	setCharacterEncoding = FakeResponse.setCharacterEncoding
	getCharacterEncoding = FakeResponse.getCharacterEncoding
	getOutputStream = FakeResponse.getOutputStream
	getWriter = FakeResponse.getWriter
	setContentLength = FakeResponse.setContentLength
	setContentLengthLong = FakeResponse.setContentLengthLong
	setContentType = FakeResponse.setContentType
	getContentType = FakeResponse.getContentType
	setBufferSize = FakeResponse.setBufferSize
	getBufferSize = FakeResponse.getBufferSize
	flushBuffer = FakeResponse.flushBuffer
	isCommitted = FakeResponse.isCommitted
	reset = FakeResponse.reset
	resetBuffer = FakeResponse.resetBuffer
	setLocale = FakeResponse.setLocale
	getLocale = FakeResponse.getLocale


class Unrelated:
	pass


# -----------------------------------------------------------------------------
#
# CONSTRUCTION
#
# -----------------------------------------------------------------------------


def test_wrapper_requires_response():
	with pytest.raises(InvalidArgument):
		ResponseWrapper(None)
	# InvalidArgument is a ValueError
	with pytest.raises(ValueError):
		ResponseWrapper(None)


def test_wrapper_holds_response():
	response = FakeResponse()
	wrapper = ResponseWrapper(response)
	assert wrapper.getWrapped() is response
	assert wrapper.getWrapped() is wrapper.getWrapped()
	assert wrapper.wrapped is response


def test_set_wrapped_rejects_none():
	response = FakeResponse()
	wrapper = ResponseWrapper(response)
	with pytest.raises(InvalidArgument):
		wrapper.setWrapped(None)
	assert wrapper.getWrapped() is response


def test_set_wrapped_redirects_calls():
	wrapper = ResponseWrapper(FakeResponse(bufferSize=8192))
	assert wrapper.getBufferSize() == 8192
	other = FakeResponse(bufferSize=4096)
	assert wrapper.setWrapped(other) is wrapper
	assert wrapper.getWrapped() is other
	assert wrapper.getBufferSize() == 4096


# -----------------------------------------------------------------------------
#
# DELEGATION
#
# -----------------------------------------------------------------------------


def test_getters_forward():
	response = FakeResponse()
	wrapper = ResponseWrapper(response)
	assert wrapper.getCharacterEncoding() == response.getCharacterEncoding()
	assert wrapper.getOutputStream() is response.stream
	assert wrapper.getWriter() is response.writer
	assert wrapper.getContentType() == "text/html"
	assert wrapper.getBufferSize() == 8192
	assert wrapper.isCommitted() is False
	assert wrapper.getLocale() == "fr_FR"


def test_setters_forward():
	response = FakeResponse()
	wrapper = ResponseWrapper(response)
	wrapper.setCharacterEncoding("UTF-8")
	wrapper.setContentLength(12)
	wrapper.setContentLengthLong(2**40)
	wrapper.setContentType("application/json")
	wrapper.setBufferSize(1024)
	wrapper.reset()
	wrapper.resetBuffer()
	wrapper.setLocale("en_GB")
	assert response.calls == [
		("setCharacterEncoding", ("UTF-8",)),
		("setContentLength", (12,)),
		("setContentLengthLong", (2**40,)),
		("setContentType", ("application/json",)),
		("setBufferSize", (1024,)),
		("reset", ()),
		("resetBuffer", ()),
		("setLocale", ("en_GB",)),
	]


def test_errors_pass_through():
	wrapper = ResponseWrapper(FakeResponse())
	with pytest.raises(OSError, match="Connection reset"):
		wrapper.flushBuffer()


def test_stream_errors_pass_through():
	class Disconnected(FakeResponse):
		def getOutputStream(self):
			raise OSError("Stream unavailable")

		def getWriter(self):
			raise OSError("Writer unavailable")

	wrapper = ResponseWrapper(ResponseWrapper(Disconnected()))
	with pytest.raises(OSError, match="Stream unavailable"):
		wrapper.getOutputStream()
	with pytest.raises(OSError, match="Writer unavailable"):
		wrapper.getWriter()


def test_committed_errors_pass_through():
	response = BufferedResponse()
	wrapper = ResponseWrapper(ResponseWrapper(response))
	wrapper.getWriter().write("Hello")
	wrapper.flushBuffer()
	assert wrapper.isCommitted()
	with pytest.raises(ResponseCommitted):
		wrapper.reset()
	with pytest.raises(ResponseCommitted):
		wrapper.resetBuffer()
	assert response.sent().endswith(b"\r\n\r\nHello")


def test_override_single_operation():
	class PlainText(ResponseWrapper):
		def setContentType(self, type):
			super().setContentType("text/plain")

	response = BufferedResponse()
	wrapper = PlainText(response)
	wrapper.setContentType("text/html")
	wrapper.setCharacterEncoding("UTF-8")
	assert response.getContentType() == "text/plain;charset=UTF-8"
	assert wrapper.getContentType() == response.getContentType()


# -----------------------------------------------------------------------------
#
# INTROSPECTION
#
# -----------------------------------------------------------------------------


def test_is_wrapper_for_instance():
	target = FakeResponse()
	chain = ResponseWrapper(ResponseWrapper(ResponseWrapper(target)))
	assert chain.isWrapperFor(target)
	assert chain.isWrapperForInstance(target)
	assert not chain.isWrapperFor(FakeResponse())
	# Intermediate wrappers are part of the chain
	assert chain.isWrapperFor(chain.getWrapped())
	assert not chain.isWrapperFor(chain)


def test_is_wrapper_for_type():
	chain = ResponseWrapper(ResponseWrapper(BufferedResponse()))
	assert chain.isWrapperFor(BufferedResponse)
	assert chain.isWrapperFor(Response)
	assert chain.isWrapperFor(ResponseWrapper)
	assert not chain.isWrapperForType(FakeResponse)
	assert ResponseWrapper(FakeResponse()).isWrapperForType(FakeResponse)


def test_is_wrapper_for_structural_type():
	assert issubclass(DuckResponse, Response)
	wrapper = ResponseWrapper(DuckResponse())
	assert wrapper.isWrapperFor(DuckResponse)
	assert wrapper.isWrapperFor(Response)
	assert not wrapper.isWrapperFor(FakeResponse)


def test_is_wrapper_for_invalid_type():
	chain = ResponseWrapper(ResponseWrapper(FakeResponse()))
	for invalid in (Unrelated, int, str):
		with pytest.raises(InvalidArgument):
			chain.isWrapperForType(invalid)
		with pytest.raises(InvalidArgument):
			chain.isWrapperFor(invalid)


def test_is_wrapper_for_parameterized_alias():
	chain = ResponseWrapper(FakeResponse())
	for alias in (list[int], dict[str, Response]):
		with pytest.raises(InvalidArgument):
			chain.isWrapperFor(alias)
		with pytest.raises(InvalidArgument):
			chain.isWrapperForType(alias)


def test_is_wrapper_for_type_validates_first():
	# The wrapped response matches, but the type is still rejected
	wrapper = ResponseWrapper(FakeResponse())
	with pytest.raises(InvalidArgument, match="Unrelated"):
		wrapper.isWrapperForType(Unrelated)


# EOF
