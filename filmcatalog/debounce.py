"""
Cancellable timer used to debounce search input.
Each trigger cancels whatever evaluation an earlier keystroke scheduled.
"""

import threading  # timer threads
from typing import Any, Callable, Optional, Tuple  # type hints

from loguru import logger  # console logger


class Debouncer:
	"""
	Collapses bursts of calls into one: only the last `trigger` within `wait`
	seconds reaches `callback`.
	"""

	def __init__(self, wait: float, callback: Callable[..., Any]):
		self.wait = wait  # seconds
		self.callback = callback
		self._lock = threading.Lock()
		self._timer: Optional[threading.Timer] = None
		self._args: Tuple[Any, ...] = ()

	@property
	def pending(self) -> bool:
		with self._lock:
			return self._timer is not None

	def trigger(self, *args: Any) -> None:
		"""Schedule `callback(*args)` after the wait, replacing any pending call."""
		with self._lock:
			if self._timer is not None:
				self._timer.cancel()
				logger.trace("[Debounce] Superseded pending evaluation")
			self._args = args
			self._timer = threading.Timer(self.wait, self._fire)
			self._timer.daemon = True
			self._timer.start()

	def cancel(self) -> None:
		with self._lock:
			if self._timer is not None:
				self._timer.cancel()
			self._timer = None

	def flush(self) -> None:
		"""Run the pending call now instead of waiting; no-op when nothing is pending."""
		with self._lock:
			if self._timer is None:
				return
			self._timer.cancel()
			self._timer = None
			args = self._args
		self.callback(*args)

	def _fire(self) -> None:
		with self._lock:
			if self._timer is None or threading.current_thread() is not self._timer:
				return  # cancelled or superseded after the timer started
			self._timer = None
			args = self._args
		self.callback(*args)
