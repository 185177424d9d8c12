"""
Owns the work buffers of a run, selects the engine, and hands the result to the
sample file writer.
"""

import dataclasses as dc
from pathlib import Path

import numpy as np

from spectral_transform.exceptions import ConfigurationError, TransformAllocationError
from spectral_transform.numeric import validate_thread_budget
from spectral_transform.sample_store import SampleStore, read_samples, write_spectrum
from spectral_transform.direct_transform import DirectTransform
from spectral_transform.recursive_transform import RecursiveTransform
from spectral_transform.scheduling import make_spawner, spawner_classes
import spectral_transform.cfg.settings
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__, 'INFO')


ENGINES : tuple[str,...] = (
	'fft', # recursive transform
	'ft', # direct summation
)


@dc.dataclass(slots=True)
class TransformDriver:
	threads : int = 1
	engine : str = spectral_transform.cfg.settings.default_engine
	policy : str = spectral_transform.cfg.settings.default_policy
	precision : int = spectral_transform.cfg.settings.default_precision

	def __post_init__(self):
		self.threads = validate_thread_budget(self.threads)
		if self.engine not in ENGINES:
			raise ConfigurationError(f'Unknown engine "{self.engine}", expected one of {ENGINES}')
		if self.policy not in spawner_classes:
			raise ConfigurationError(f'Unknown fork policy "{self.policy}", expected one of {tuple(spawner_classes.keys())}')

	def allocate_buffers(self, store : SampleStore) -> tuple[np.ndarray, np.ndarray]:
		"""
		Create the buffer pair. The recursive engine needs the samples in both,
		the direct engine reads the first and writes the second.
		"""
		try:
			buffer = store.new_buffer()
			output = store.new_buffer() if self.engine == 'fft' else np.zeros_like(buffer)
		except MemoryError as e:
			raise TransformAllocationError(f'Failed to allocate work buffers for {store.n} samples') from e
		return buffer, output

	def run(self, store : SampleStore) -> np.ndarray:
		buffer, output = self.allocate_buffers(store)
		_lgr.info(f'Running "{self.engine}" engine on {store.n} samples with {self.threads} threads')

		match self.engine:
			case 'fft':
				with make_spawner(self.policy, self.threads) as spawner:
					result = RecursiveTransform(spawner)(buffer, output)
			case 'ft':
				result = DirectTransform(self.threads)(buffer, output)
			case _:
				raise ConfigurationError(f'Unknown engine "{self.engine}", expected one of {ENGINES}')

		return result

	def run_files(self, input_path : str | Path, output_path : str | Path) -> np.ndarray:
		"""
		Read samples from `input_path`, transform them, and write the result to
		`output_path`.
		"""
		result = self.run(read_samples(input_path))
		write_spectrum(output_path, result, self.precision)
		return result
