"""
Numeric helpers shared by the transform engines.

The recursive engine rotates partial sums by `twiddle(index, n)`, which raises
the base exponent `FFT_EXPONENT` to the position `index/n`. The direct engine
uses `DFT_EXPONENT` for every term of its summation.
"""

import numpy as np

from spectral_transform.exceptions import ConfigurationError


# -i*pi, the recursive engine's combination step works on half-turns
FFT_EXPONENT : complex = -np.pi * 1j

# -2*i*pi, one full turn per output index for the direct summation
DFT_EXPONENT : complex = -2.0 * np.pi * 1j


def twiddle(index : int | np.ndarray, n : int) -> complex | np.ndarray:
	"""
	Unit rotation applied to the odd half of a butterfly at `index` for a
	transform of size `n`.
	"""
	return np.exp(FFT_EXPONENT * index / n)


def is_power_of_two(n : int) -> bool:
	return n > 0 and (n & (n - 1)) == 0


def validate_transform_size(n : int) -> int:
	"""
	The recursive engine only works on sequences whose length is a power of two.
	"""
	if not is_power_of_two(n):
		raise ConfigurationError(f'Recursive transform needs a power of two number of samples, have {n=}')
	return n


def validate_thread_budget(threads : int) -> int:
	if isinstance(threads, bool) or not isinstance(threads, (int, np.integer)) or threads < 1:
		raise ConfigurationError(f'Thread budget must be a positive integer, have {threads=}')
	return int(threads)


def partition(n : int, parts : int) -> list[tuple[int,int]]:
	"""
	Split the index range [0, n) into `parts` contiguous half-open chunks.
	
	Chunk sizes differ by at most one, the first `n % parts` chunks hold the
	extra element. When `parts > n` the trailing chunks are empty.
	
	# Arguments #
		n : int
			Number of indices to split
		parts : int
			Number of chunks to produce, one per worker
	
	# Returns #
		chunks : list[tuple[int,int]]
			(start, end) pairs, chunk `i` covers `range(start, end)`
	"""
	chunk_size, extra_size = divmod(n, parts)
	return [
		(i*chunk_size + min(i, extra_size), (i+1)*chunk_size + min(i+1, extra_size)) 
		for i in range(parts)
	]


def ordered_sum(terms : np.ndarray) -> complex:
	"""
	Sum `terms` left to right in increasing index order. `np.sum` uses pairwise
	summation, which groups the additions differently.
	"""
	if terms.size == 0:
		return 0j
	return np.add.accumulate(terms)[-1]
