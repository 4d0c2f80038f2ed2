from __future__ import annotations

import inspect
import itertools
import logging
import threading
from collections.abc import Callable
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)


class Callback(NamedTuple):
	fn: Callable[..., Any]
	n_args: int


class FunctionRegistry:
	"""In-process function table handing out integer handles.

	Hosts that run in the same process (the CLI, local test hosts) use it to
	implement `register_function`. Handles start at 1 and are never reused for
	the lifetime of the registry, across threads.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._ids = itertools.count(1)
		self._callbacks: dict[int, Callback] = {}

	def register_function(self, fn: Callable[..., Any]) -> int:
		if not callable(fn):
			raise TypeError(f"Expected a callable, got {type(fn).__name__}")
		callback = Callback(fn=fn, n_args=len(inspect.signature(fn).parameters))
		with self._lock:
			handle = next(self._ids)
			self._callbacks[handle] = callback
		logger.debug("Registered function %r as handle %d", fn, handle)
		return handle

	def lookup(self, handle: int) -> Callback:
		with self._lock:
			try:
				return self._callbacks[handle]
			except KeyError:
				raise KeyError(f"Unknown function handle {handle}") from None

	def release(self, handle: int) -> None:
		with self._lock:
			self._callbacks.pop(handle, None)

	def __len__(self) -> int:
		with self._lock:
			return len(self._callbacks)

	def __contains__(self, handle: object) -> bool:
		with self._lock:
			return handle in self._callbacks
