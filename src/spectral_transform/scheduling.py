"""
Decides where the recursive transform forks concurrent branches.

A spawner is handed the two children of every non-terminal recursion node via
`run_pair(step, even, odd)`, and returns once both have finished. Whether the
children run on the calling thread or on the spawner's worker pool is the only
thing a spawner decides; the computation each child performs is fixed, so the
result does not depend on the spawner used.

Spawners own a bounded `concurrent.futures.ThreadPoolExecutor` and are used as
context managers:

>>> with ExactLevelSpawner(4) as spawner:
>>> 	RecursiveTransform(spawner).run(task)
"""

import concurrent.futures
import threading
from typing import Callable

from spectral_transform.exceptions import ConfigurationError
from spectral_transform.numeric import validate_thread_budget
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__)


class Spawner:
	"""
	Base class, runs both children sequentially on the calling thread.
	"""
	name : str = 'sequential'

	def __init__(self, threads : int = 1):
		self.threads = validate_thread_budget(threads)
		self.fork_steps : list[int] = [] # step of every node that forked its children
		self._fork_steps_lock = threading.Lock()
		self._executor : concurrent.futures.ThreadPoolExecutor | None = None

	def __repr__(self):
		return f'{self.__class__.__name__}(threads={self.threads})'

	@property
	def pool_size(self) -> int:
		return 0

	def __enter__(self):
		if self.pool_size > 0:
			self._executor = concurrent.futures.ThreadPoolExecutor(
				max_workers=self.pool_size,
				thread_name_prefix=f'{self.name}-spawner'
			)
		return self

	def __exit__(self, exc_type, exc_value, traceback):
		if self._executor is not None:
			self._executor.shutdown(wait=True)
			self._executor = None
		return False

	def _submit(self, func : Callable[[],None]) -> concurrent.futures.Future:
		if self._executor is None:
			raise RuntimeError(f'{self!r} must be entered as a context manager before it can fork')
		return self._executor.submit(func)

	def _record_fork(self, step : int) -> None:
		with self._fork_steps_lock:
			self.fork_steps.append(step)
		_lgr.debug(f'Forking children of node at {step=} on thread "{threading.current_thread().name}"')

	def run_pair(self, step : int, even : Callable[[],None], odd : Callable[[],None]) -> None:
		even()
		odd()


class SequentialSpawner(Spawner):
	"""
	Never forks, the whole recursion runs on the calling thread.
	"""
	pass


class ExactLevelSpawner(Spawner):
	"""
	Forks both children onto their own threads only at nodes where `step*2`
	equals the thread budget, i.e. at the tree level holding `threads` nodes.

	Nodes above that level run in the calling thread, nodes below it run
	sequentially inside the forked task. When no level has exactly `threads`
	nodes (`threads` not a power of two, or larger than the transform) the
	recursion never forks.

	Nodes of the matching level are reached one at a time by the depth first
	recursion above them, so at most two forked tasks are alive at once.
	"""
	name = 'level'

	@property
	def pool_size(self) -> int:
		return 2 if self.threads > 1 else 0

	def run_pair(self, step, even, odd):
		if step * 2 != self.threads:
			return super().run_pair(step, even, odd)

		self._record_fork(step)
		futures = [self._submit(even), self._submit(odd)]

		# Join barrier, re-raises the first exception from a child
		for future in futures:
			future.result()


class BudgetSpawner(Spawner):
	"""
	Lets any node offload its odd child to a worker while a slot of the thread
	budget is free, the even child always runs on the calling thread.

	The calling thread counts towards the budget, so `threads-1` slots are
	available. The pool has exactly that many workers, so a forked task never
	queues behind a parent that is blocked on its own join.
	"""
	name = 'budget'

	def __init__(self, threads : int = 1):
		super().__init__(threads)
		self._slots = threading.BoundedSemaphore(self.threads - 1) if self.threads > 1 else None

	@property
	def pool_size(self) -> int:
		return self.threads - 1

	def _run_and_release(self, func : Callable[[],None]) -> None:
		try:
			func()
		finally:
			self._slots.release()

	def run_pair(self, step, even, odd):
		if self._slots is None or not self._slots.acquire(blocking=False):
			return super().run_pair(step, even, odd)

		self._record_fork(step)
		try:
			future = self._submit(lambda : self._run_and_release(odd))
		except BaseException:
			self._slots.release()
			raise

		try:
			even()
		finally:
			# Always wait for the odd child, both write into the same buffers
			concurrent.futures.wait([future])
		future.result()


spawner_classes : dict[str, type[Spawner]] = {
	SequentialSpawner.name : SequentialSpawner,
	ExactLevelSpawner.name : ExactLevelSpawner,
	BudgetSpawner.name : BudgetSpawner,
}


def make_spawner(policy : str, threads : int) -> Spawner:
	"""
	Create the spawner named `policy` ("sequential", "level", or "budget") for a
	thread budget of `threads`.
	"""
	try:
		spawner_class = spawner_classes[policy]
	except KeyError as e:
		raise ConfigurationError(f'Unknown fork policy "{policy}", expected one of {tuple(spawner_classes.keys())}') from e
	return spawner_class(threads)
