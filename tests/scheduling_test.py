import threading
import time

from spectral_transform.scheduling import BudgetSpawner, ExactLevelSpawner, SequentialSpawner, make_spawner
from spectral_transform.exceptions import ConfigurationError


def test_make_spawner_by_name():
	assert type(make_spawner('level', 4)) is ExactLevelSpawner
	assert type(make_spawner('budget', 4)) is BudgetSpawner
	assert type(make_spawner('sequential', 4)) is SequentialSpawner
	
	try:
		make_spawner('nearest', 4)
	except ConfigurationError:
		pass
	else:
		assert False, "Unknown policy should be rejected"


def test_spawner_rejects_bad_thread_budget():
	for threads in (0, -4):
		try:
			ExactLevelSpawner(threads)
		except ConfigurationError:
			pass
		else:
			assert False, f"{threads=} should be rejected"


def test_exact_level_spawner_joins_both_children():
	finished = []
	
	def slow_child():
		time.sleep(0.05)
		finished.append('slow')
	
	with ExactLevelSpawner(4) as spawner:
		spawner.run_pair(2, slow_child, lambda : finished.append('fast'))
		assert sorted(finished) == ['fast', 'slow'], f"run_pair should only return once both children finished, have {finished}"
	
	assert spawner.fork_steps == [2], f"Should have forked once at step 2, have {spawner.fork_steps}"


def test_exact_level_spawner_only_forks_at_matching_step():
	main_thread = threading.current_thread()
	seen = []
	record = lambda : seen.append(threading.current_thread())
	
	with ExactLevelSpawner(8) as spawner:
		for step in (1, 2, 8, 16):
			spawner.run_pair(step, record, record)
	
	assert all(t is main_thread for t in seen), "Steps other than threads/2 should run on the calling thread"
	assert spawner.fork_steps == [], f"Should not have forked, forked at {spawner.fork_steps}"


def test_child_exception_propagates_to_parent():
	def failing_child():
		raise ValueError('child failed')
	
	for spawner_class, step in ((ExactLevelSpawner, 1), (BudgetSpawner, 1), (SequentialSpawner, 1)):
		with spawner_class(2) as spawner:
			try:
				spawner.run_pair(step, lambda : None, failing_child)
			except ValueError as e:
				assert str(e) == 'child failed'
			else:
				assert False, f"{spawner_class.__name__} should re-raise the exception of a child"


def test_budget_spawner_never_exceeds_budget():
	threads = 3
	lock = threading.Lock()
	active = [0]
	peak = [0]
	
	def leaf():
		with lock:
			active[0] += 1
			peak[0] = max(peak[0], active[0])
		time.sleep(0.01)
		with lock:
			active[0] -= 1
	
	def node(spawner, depth):
		if depth == 0:
			return leaf()
		spawner.run_pair(depth, lambda : node(spawner, depth-1), lambda : node(spawner, depth-1))
	
	with BudgetSpawner(threads) as spawner:
		node(spawner, 4)
	
	assert 1 <= peak[0] <= threads, f"At most {threads} leaves should run at once, peak was {peak[0]}"
	assert len(spawner.fork_steps) >= 1, "Should have used the spare threads"


def test_spawner_must_be_entered_before_forking():
	spawner = ExactLevelSpawner(2)
	try:
		spawner.run_pair(1, lambda : None, lambda : None)
	except RuntimeError:
		pass
	else:
		assert False, "Forking outside of the context manager should fail"
