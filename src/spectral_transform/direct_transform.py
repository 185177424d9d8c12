"""
Direct summation transform, every output element is summed independently

	output[k] = sum_{j=0}^{n-1} samples[j] * exp(-2*pi*i*k*j/n)

The output index range is split into contiguous chunks, one per worker.
"""

import concurrent.futures
import dataclasses as dc

import numpy as np

from spectral_transform.numeric import DFT_EXPONENT, ordered_sum, partition, validate_thread_budget
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__)


def transform_chunk(samples : np.ndarray, output : np.ndarray, start : int, end : int) -> None:
	"""
	Write output elements `start` to `end` (exclusive). Only reads `samples` and
	only writes to `output[start:end]`.
	"""
	n = samples.size
	j = np.arange(n)
	for k in range(start, end):
		output[k] = ordered_sum(samples * np.exp(DFT_EXPONENT / n * k * j))


@dc.dataclass(slots=True, repr=False)
class DirectTransform:
	threads : int = 1

	def __post_init__(self):
		self.threads = validate_thread_budget(self.threads)

	def __repr__(self):
		return f'{self.__class__.__name__}(threads={self.threads})'

	def worker_chunks(self, n : int) -> list[tuple[int,int]]:
		"""
		Non-empty chunks of [0, n), one worker each. Budgets larger than `n` leave
		empty chunks, which get no worker.
		"""
		return [(start, end) for start, end in partition(n, self.threads) if end > start]

	def __call__(self, samples : np.ndarray, output : np.ndarray) -> np.ndarray:
		if samples.shape != output.shape:
			raise ValueError(f'Samples and output must have the same shape, have {samples.shape=} {output.shape=}')

		chunks = self.worker_chunks(samples.size)
		_lgr.debug(f'Direct transform of n={samples.size} in chunks {chunks}')

		with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, len(chunks)), thread_name_prefix='direct') as executor:
			futures = [
				executor.submit(transform_chunk, samples, output, start, end)
				for start, end in chunks
			]
			# Join barrier, re-raises the first exception from a worker
			for future in futures:
				future.result()

		return output


def direct_transform(samples : np.ndarray, threads : int = 1) -> np.ndarray:
	"""
	Return the transform of `samples` computed by direct summation using
	`threads` workers.
	"""
	samples = np.array(samples, dtype=np.complex128).reshape(-1)
	return DirectTransform(threads)(samples, np.zeros_like(samples))
