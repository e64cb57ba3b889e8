DEFAULT_ENCODING: str = "utf8"
# Encoding assumed by HTTP when no charset is given
HTTP_ENCODING: str = "ISO-8859-1"


def asBytes(
	value: str | bytes | bytearray | None,
	encoding: str = DEFAULT_ENCODING,
	errors: str = "strict",
) -> bytes:
	if isinstance(value, bytes):
		return value
	elif isinstance(value, bytearray):
		return bytes(value)
	elif isinstance(value, str):
		return value.encode(encoding, errors)
	elif value is None:
		return b""
	else:
		raise ValueError(f"Expected bytes or str, got: {value}")


def splitContentType(value: str) -> tuple[str, str | None]:
	"""Splits a `Content-Type` value into its mime type and its charset, if any."""
	mime, *params = value.split(";")
	charset: str | None = None
	for param in params:
		name, _, v = param.partition("=")
		if name.strip().lower() == "charset" and v.strip():
			charset = v.strip().strip('"')
	return mime.strip(), charset


# EOF
