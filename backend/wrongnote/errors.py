from __future__ import annotations


class RemoteError(Exception):
	"""Base error for record store calls."""


class RemoteUnavailable(RemoteError):
	"""The store could not be reached or answered with an HTTP error status."""


class RemoteRejected(RemoteError):
	"""The store answered but reported an error for the request."""


class CategorizationError(Exception):
	"""No candidate model produced a usable categorization."""
