import threading

import numpy as np

from spectral_transform.direct_transform import DirectTransform, direct_transform
import spectral_transform.direct_transform as direct_transform_module
from spectral_transform.exceptions import ConfigurationError


def test_direct_transform_of_constant():
	for threads in (1, 2):
		result = direct_transform([1,1,1,1], threads)
		expected = np.array([4,0,0,0], dtype=np.complex128)
		assert np.allclose(result, expected, atol=1E-12), f"{threads=}: expected {expected}, have {result}"


def test_direct_transform_single_sample_unchanged():
	for value in (2.5, -1+3j):
		result = direct_transform([value], 1)
		assert result.shape == (1,), f"Should have one element, have {result.shape}"
		assert result[0] == value, f"Single sample should be returned unchanged, expected {value} have {result[0]}"


def test_direct_transform_matches_numpy():
	rng = np.random.default_rng(12345)
	for n in (3, 5, 8, 17):
		samples = rng.normal(size=n) + 1j*rng.normal(size=n)
		result = direct_transform(samples, 3)
		expected = np.fft.fft(samples)
		assert np.allclose(result, expected, rtol=1E-9, atol=1E-9), f"{n=}: max difference {np.max(np.abs(result-expected))}"


def test_direct_transform_independent_of_thread_count():
	rng = np.random.default_rng(2)
	n = 21
	samples = rng.normal(size=n)
	reference = direct_transform(samples, 1)
	for threads in range(2, n+3):
		result = direct_transform(samples, threads)
		assert np.array_equal(result, reference), f"{threads=} should give bit for bit the same result as one thread"


def test_direct_transform_leaves_samples_untouched():
	samples = np.arange(8, dtype=np.complex128)
	original = np.array(samples)
	output = np.zeros_like(samples)
	
	DirectTransform(4)(samples, output)
	
	assert np.array_equal(samples, original), "Samples should only be read"


def test_direct_transform_rejects_bad_thread_budget():
	try:
		DirectTransform(0)
	except ConfigurationError:
		pass
	else:
		assert False, "A thread budget of zero should be rejected"


def test_direct_transform_only_starts_workers_for_non_empty_chunks():
	transform = DirectTransform(5000)
	chunks = transform.worker_chunks(4)
	assert chunks == [(0,1), (1,2), (2,3), (3,4)], f"Only the {len(chunks)} non-empty chunks should get a worker, have {chunks}"
	
	worker_names = set()
	original_transform_chunk = direct_transform_module.transform_chunk
	def recording_transform_chunk(*args):
		worker_names.add(threading.current_thread().name)
		original_transform_chunk(*args)
	
	direct_transform_module.transform_chunk = recording_transform_chunk
	try:
		samples = np.array([1, 2, 3, 4], dtype=np.complex128)
		result = transform(samples, np.zeros_like(samples))
	finally:
		direct_transform_module.transform_chunk = original_transform_chunk
	
	assert len(worker_names) <= 4, f"At most one worker per output element should run, have {len(worker_names)}"
	assert np.allclose(result, np.fft.fft(samples)), f"Result should be unaffected by the large budget, have {result}"
