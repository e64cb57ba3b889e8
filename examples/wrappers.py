"""
Response Wrapper Example

This demonstrates decorating a response with `ResponseWrapper` subclasses.
Features shown:
- Overriding a few operations while the others keep forwarding
- Counting the bytes written through a wrapped output stream
- Walking a chain of wrappers with `isWrapperFor`

Usage:
    python wrappers.py
"""

import sys
from respwrap import ResponseWrapper, BufferedResponse
from respwrap.utils.logging import info


class ForceUTF8(ResponseWrapper):
	"""Ignores any charset change, always encoding as UTF-8."""

	def __init__(self, wrapped):
		super().__init__(wrapped)
		super().setCharacterEncoding("UTF-8")

	def setCharacterEncoding(self, charset):
		pass

	def setContentType(self, type):
		super().setContentType(type)
		super().setCharacterEncoding("UTF-8")


class Counted:
	def __init__(self, stream):
		self.stream = stream
		self.count = 0

	def write(self, data):
		self.count += len(data)
		return self.stream.write(data)


class CountingResponse(ResponseWrapper):
	"""Counts the bytes written to the output stream."""

	def __init__(self, wrapped):
		super().__init__(wrapped)
		self.counted = None

	def getOutputStream(self):
		if self.counted is None:
			self.counted = Counted(super().getOutputStream())
		return self.counted


response = BufferedResponse(sys.stdout.buffer)
wrapped = CountingResponse(ForceUTF8(response))
wrapped.setContentType("text/plain; charset=ISO-8859-1")
wrapped.setCharacterEncoding("ascii")
wrapped.getOutputStream().write("Héllo, World !\n".encode(wrapped.getCharacterEncoding()))
wrapped.flushBuffer()

info(
	"Response sent",
	ContentType=wrapped.getContentType(),
	Written=wrapped.counted.count,
	WrapsBuffered=wrapped.isWrapperFor(BufferedResponse),
	WrapsForced=wrapped.isWrapperFor(ForceUTF8),
)

# EOF
