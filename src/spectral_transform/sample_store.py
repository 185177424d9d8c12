"""
Storage of a sample sequence and the text format it is read from and written to.

Input files hold a count `n` followed by at least `n` whitespace separated
values. Output files hold `n` on the first line then one line per element with
the real and imaginary parts separated by a space.
"""

import dataclasses as dc
from pathlib import Path

import numpy as np

from spectral_transform.exceptions import SampleFileError
import spectral_transform.cfg.settings
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__)


@dc.dataclass(slots=True, repr=False, eq=False)
class SampleStore:
	"""
	Sequence of complex samples, fixed for the duration of a run.
	"""
	samples : np.ndarray # read-only complex128 array
	n : int = dc.field(init=False)
	
	def __post_init__(self):
		self.samples = np.array(self.samples, dtype=np.complex128).reshape(-1)
		self.samples.flags.writeable = False
		self.n = self.samples.size
	
	@classmethod
	def from_values(cls, values) -> 'SampleStore':
		return cls(values)
	
	def new_buffer(self) -> np.ndarray:
		"""
		Writable copy of the samples, used to seed a work buffer.
		"""
		return np.array(self.samples, dtype=np.complex128)
	
	def __len__(self):
		return self.n
	
	def __repr__(self):
		return f'{self.__class__.__name__}(n={self.n})'


def _parse_count(token : str, path : Path) -> int:
	try:
		n = int(token)
	except ValueError as e:
		raise SampleFileError(f'Sample count "{token}" in "{path}" is not an integer') from e
	if n < 1:
		raise SampleFileError(f'Sample count in "{path}" must be at least 1, have {n}')
	return n


def _parse_value(token : str, index : int, path : Path) -> complex:
	try:
		return complex(token)
	except ValueError as e:
		raise SampleFileError(f'Sample {index} "{token}" in "{path}" is not a number') from e


def read_samples(path : str | Path) -> SampleStore:
	"""
	Read a sample file, the whole run is aborted (`SampleFileError`) if the
	file cannot be read or holds fewer samples than it declares.
	"""
	path = Path(path)
	try:
		with open(path, 'r', encoding='utf-8') as f:
			tokens = f.read().split()
	except OSError as e:
		raise SampleFileError(f'Failed to read input file "{path}": {e.strerror}') from e
	except UnicodeDecodeError as e:
		raise SampleFileError(f'Input file "{path}" is not a text file: {e.reason} at byte {e.start}') from e
	
	if len(tokens) == 0:
		raise SampleFileError(f'Input file "{path}" is empty')
	
	n = _parse_count(tokens[0], path)
	value_tokens = tokens[1:]
	if len(value_tokens) < n:
		raise SampleFileError(f'Input file "{path}" declares {n} samples but only holds {len(value_tokens)}')
	if len(value_tokens) > n:
		_lgr.warning(f'Input file "{path}" holds {len(value_tokens)} values, ignoring all after the first {n}')
	
	store = SampleStore([_parse_value(t, i, path) for i, t in enumerate(value_tokens[:n])])
	_lgr.debug(f'Read {store.n} samples from "{path}"')
	return store


def format_complex(value : complex, precision : int = spectral_transform.cfg.settings.default_precision) -> str:
	return f'{value.real:.{precision}f} {value.imag:.{precision}f}'


def write_spectrum(path : str | Path, values : np.ndarray, precision : int = spectral_transform.cfg.settings.default_precision) -> None:
	"""
	Write `values` in the output format, first line is the number of values.
	"""
	path = Path(path)
	try:
		with open(path, 'w', encoding='utf-8') as f:
			f.write(f'{len(values)}\n')
			for value in values:
				f.write(format_complex(complex(value), precision)+'\n')
	except OSError as e:
		raise SampleFileError(f'Failed to write output file "{path}": {e.strerror}') from e
	_lgr.info(f'Transformed sequence written to "{path}"')
