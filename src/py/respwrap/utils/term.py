from typing import ClassVar
import os
import re

# SEE: https://no-color.org/
NO_COLOR: bool = "NO_COLOR" in os.environ
FORCE_COLOR: bool = "FORCE_COLOR" in os.environ
COLOR: bool = FORCE_COLOR or not NO_COLOR

SEQUENCE = re.compile(r"\033\[[0-9;]*m")


class Term:
	"""ANSI sequences used by the logger, empty when colours are disabled."""

	BOLD: ClassVar[str] = "\033[1m" if COLOR else ""
	RESET: ClassVar[str] = "\033[0m" if COLOR else ""

	@staticmethod
	def Color(code: int, bold: bool = False) -> str:
		return f"\033[{'1' if bold else '0'};38;5;{code}m" if COLOR else ""

	@staticmethod
	def Strip(text: str) -> str:
		"""Removes the colour sequences from the given text."""
		return SEQUENCE.sub("", text)


# EOF
