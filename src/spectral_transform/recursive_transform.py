"""
Recursive radix-2 transform that writes every level directly into its final
layout by swapping the roles of two work buffers at each recursion level.

A node of the recursion is described by a `TransformTask`. Its children read
from the node's `output` and write into the node's `buffer`, the odd child
looks at both buffers shifted by `step` elements. Once both children are done
the node combines their halves (butterfly) from `output` into `buffer`.

For a transform of size `n` the result ends up in the `buffer` of the root
task, both buffers must hold the samples before the root task is run.
"""

import dataclasses as dc

import numpy as np

from spectral_transform.numeric import twiddle, validate_transform_size
from spectral_transform.scheduling import Spawner, make_spawner
import spectral_transform.cfg.settings
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__)


@dc.dataclass(slots=True, frozen=True, repr=False, eq=False)
class TransformTask:
	"""
	Descriptor of one node of the recursion tree, the unit of work handed to a
	forked thread.
	"""
	n : int # size of the whole transform
	step : int # stride between the elements this node combines, doubles every level
	buffer : np.ndarray # combined result is written here
	output : np.ndarray # children leave their results here

	@property
	def is_terminal(self) -> bool:
		return self.step >= self.n

	def children(self) -> tuple['TransformTask', 'TransformTask']:
		"""
		Even (offset 0) and odd (offset `step`) child descriptors. The roles of
		the two buffers are swapped, the odd child works on views so its writes
		land in the parent's layout without copying.
		"""
		step = self.step * 2
		return (
			TransformTask(self.n, step, self.output, self.buffer),
			TransformTask(self.n, step, self.output[self.step:], self.buffer[self.step:]),
		)

	def __repr__(self):
		return f'{self.__class__.__name__}(n={self.n}, step={self.step})'


def butterfly(task : TransformTask) -> None:
	"""
	Combine the two half-size results found in `task.output` into `task.buffer`.

	For every `index` in range(0, n, 2*step)
		term = twiddle(index, n) * output[index + step]
		buffer[index/2] = output[index] + term
		buffer[(index + n)/2] = output[index] - term
	"""
	n, step = task.n, task.step
	index = np.arange(0, n, step*2)

	term = twiddle(index, n) * task.output[index + step]

	task.buffer[index // 2] = task.output[index] + term
	task.buffer[(index + n) // 2] = task.output[index] - term


@dc.dataclass(slots=True, repr=False)
class RecursiveTransform:
	"""
	Runs the recursion, asking `spawner` whether the children of each node are
	run on the calling thread or forked.
	"""
	spawner : Spawner = dc.field(default_factory=Spawner)

	def run(self, task : TransformTask) -> None:
		if task.is_terminal:
			return

		even, odd = task.children()
		self.spawner.run_pair(
			task.step,
			lambda : self.run(even),
			lambda : self.run(odd),
		)

		# Both children have finished by now
		butterfly(task)

	def __call__(self, buffer : np.ndarray, output : np.ndarray) -> np.ndarray:
		"""
		Transform the samples held by both `buffer` and `output`.

		# Arguments #
			buffer : np.ndarray
				Complex work buffer holding the samples, receives the result
			output : np.ndarray
				Complex work buffer of the same length also holding the samples,
				used as scratch space

		# Returns #
			buffer : np.ndarray
				The transformed sequence
		"""
		if buffer.shape != output.shape:
			raise ValueError(f'Work buffers must have the same shape, have {buffer.shape=} {output.shape=}')
		n = validate_transform_size(buffer.size)
		_lgr.debug(f'Recursive transform of {n=} with {self.spawner!r}')

		self.run(TransformTask(n, 1, buffer, output))

		_lgr.debug(f'Forked at steps {self.spawner.fork_steps}')
		return buffer


def recursive_transform(
		samples : np.ndarray,
		threads : int = 1,
		policy : str = spectral_transform.cfg.settings.default_policy,
	) -> np.ndarray:
	"""
	Return the transform of `samples` computed by the recursive engine with a
	thread budget of `threads`, forking according to `policy`.
	"""
	buffer = np.array(samples, dtype=np.complex128).reshape(-1)
	output = np.array(buffer)

	with make_spawner(policy, threads) as spawner:
		return RecursiveTransform(spawner)(buffer, output)
