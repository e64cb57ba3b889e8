import sys
import time
from enum import Enum
from typing import NamedTuple, Any, TextIO
from contextvars import ContextVar
from ..config import LOG_LEVEL
from .term import Term

ERR: TextIO = sys.stderr

LogOrigin: ContextVar[str] = ContextVar("LogOrigin", default="respwrap")


class LogLevel(Enum):
	Debug = 0
	Info = 10
	Warning = 30
	Error = 40  # A managed error
	Exception = 50  # An un-managed error


LOG_LEVEL_COLOR: dict[LogLevel, int] = {
	LogLevel.Debug: 31,
	LogLevel.Info: 75,
	LogLevel.Warning: 202,
	LogLevel.Error: 160,
	LogLevel.Exception: 124,
}


class LogEntry(NamedTuple):
	origin: str
	time: float
	level: LogLevel = LogLevel.Info
	message: str | None = None
	value: Any = None
	context: dict[str, Any] | None = None


def level(name: str | LogLevel) -> LogLevel:
	"""Returns the log level matching the given name, defaulting to `Info`."""
	if isinstance(name, LogLevel):
		return name
	for _ in LogLevel:
		if _.name.lower() == name.strip().lower():
			return _
	return LogLevel.Info


# Entries below that level are not written
Threshold: ContextVar[LogLevel] = ContextVar(
	"LogThreshold", default=level(LOG_LEVEL)
)


def setStream(stream: TextIO) -> TextIO:
	global ERR
	ERR = stream
	return ERR


def formatData(value: Any) -> str:
	if value is None or value == () or value == [] or value == {}:
		return "◌"
	elif isinstance(value, dict):
		return " ".join(f"{Term.BOLD}{k}{Term.RESET}={formatData(v)}" for k, v in value.items())
	elif isinstance(value, list) or isinstance(value, tuple):
		return ",".join(formatData(v) for v in value)
	elif isinstance(value, str):
		return repr(value) if " " in value else value
	elif isinstance(value, bool):
		return "✓" if value else "✗"
	elif isinstance(value, float):
		return f"{value:0.2f}"
	else:
		return str(value)


def logged(lvl: LogLevel) -> bool:
	"""Tells if entries of the given level are currently written, which
	guards against building entries that would be dropped."""
	return lvl.value >= Threshold.get().value


def send(entry: LogEntry) -> LogEntry:
	if not logged(entry.level):
		return entry
	clr: str = Term.Color(LOG_LEVEL_COLOR[entry.level])
	code: str = f" [{entry.value}]" if entry.value is not None else ""
	ERR.write(
		f"{clr}{Term.BOLD}[{entry.origin}]{Term.RESET}{code} {entry.message} {formatData(entry.context)}{Term.RESET}\n"
	)
	ERR.flush()
	return entry


def entry(
	message: str,
	*,
	level: LogLevel = LogLevel.Info,
	value: Any = None,
	origin: str | None = None,
	context: dict[str, Any],
) -> LogEntry:
	return LogEntry(
		origin=origin or LogOrigin.get(),
		time=time.time(),
		level=level,
		message=message,
		value=value,
		context=context,
	)


def debug(message: str, *, origin: str | None = None, **context: Any) -> LogEntry:
	return send(entry(message, level=LogLevel.Debug, origin=origin, context=context))


def info(message: str, *, origin: str | None = None, **context: Any) -> LogEntry:
	return send(entry(message, origin=origin, context=context))


def warning(message: str, *, origin: str | None = None, **context: Any) -> LogEntry:
	return send(entry(message, level=LogLevel.Warning, origin=origin, context=context))


def error(
	message: str,
	code: int | str | None,
	*,
	origin: str | None = None,
	**context: Any,
) -> LogEntry:
	return send(
		entry(message, level=LogLevel.Error, value=code, origin=origin, context=context)
	)


def exception(exception: Exception, message: str | None = None) -> Exception:
	try:
		label: str = f"[{exception.__class__.__name__}] {exception}"
		ERR.write(f"!!! EXCP {f'{message}: {label}' if message else label}\n")
		tb = exception.__traceback__
		while tb:
			code = tb.tb_frame.f_code
			ERR.write(
				f"... in {code.co_name:15s} at {tb.tb_lineno:4d} in {code.co_filename}\n",
			)
			tb = tb.tb_next
		ERR.flush()
	except Exception:  # nosec: B110
		# Can be called from within an exception handler, so it must not raise.
		pass
	# Returned so that it can be used as `raise exception(...)`
	return exception


# EOF
