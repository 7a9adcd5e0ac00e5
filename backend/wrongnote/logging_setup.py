"""Logging bootstrap for the API process."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from .settings import settings


class _JsonFormatter(logging.Formatter):
	"""Emit compact JSON log lines."""

	_fields = ("model", "record_id")

	def format(self, record: logging.LogRecord) -> str:
		payload = {
			"ts": datetime.now(timezone.utc).isoformat(),
			"level": record.levelname,
			"logger": record.name,
			"message": record.getMessage(),
		}
		for field in self._fields:
			value = getattr(record, field, None)
			if value is not None:
				payload[field] = value
		if record.exc_info:
			payload["exception"] = self.formatException(record.exc_info)
		return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging() -> None:
	"""Configure the root logger once."""
	root = logging.getLogger()
	if getattr(root, "_wrongnote_logging_configured", False):
		return

	level = getattr(logging, settings.log_level.upper(), logging.INFO)
	handler = logging.StreamHandler(sys.stdout)
	if settings.log_format.lower().strip() == "json":
		handler.setFormatter(_JsonFormatter())
	else:
		handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

	root.handlers.clear()
	root.addHandler(handler)
	root.setLevel(level)

	# Keep uvicorn output in the same stream/formatter.
	for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
		logger = logging.getLogger(name)
		logger.handlers.clear()
		logger.propagate = True

	# httpx logs every request at INFO, which includes the Gemini key in the query string
	logging.getLogger("httpx").setLevel(logging.WARNING)

	root._wrongnote_logging_configured = True
