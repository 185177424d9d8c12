"""
Diagnostic plot of a transformed sequence
"""
from pathlib import Path

import numpy as np
import matplotlib as mpl
import matplotlib.figure

from spectral_transform.exceptions import SampleFileError
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__, 'INFO')


def create_spectrum_figure(values : np.ndarray, title : str = 'Spectrum', size : float = 6) -> mpl.figure.Figure:
	"""
	Creates a figure with the magnitude (top) and phase (bottom) of `values`
	against their index.
	"""
	values = np.asarray(values, dtype=np.complex128)
	k = np.arange(values.size)

	fig = mpl.figure.Figure(figsize=(size*1.5, size))
	ax_mag, ax_phase = fig.subplots(2, 1, sharex=True, squeeze=True)

	fig.suptitle(title)

	ax_mag.plot(k, np.abs(values), marker='.', linestyle='-')
	ax_mag.set_ylabel('magnitude')

	ax_phase.plot(k, np.angle(values), marker='.', linestyle='none')
	ax_phase.set_ylabel('phase (rad)')
	ax_phase.set_xlabel('index')

	return fig


def supported_formats() -> tuple[str,...]:
	"""
	File extensions (without the ".") that a spectrum figure can be saved as.
	"""
	return tuple(mpl.figure.Figure().canvas.get_supported_filetypes().keys())


def check_plot_path(path : str | Path) -> Path:
	"""
	Raise `SampleFileError` if the extension of `path` is not a format
	matplotlib can save to. No extension saves in matplotlib's default format.
	"""
	path = Path(path)
	fmt = path.suffix[1:].lower()
	if fmt and fmt not in supported_formats():
		raise SampleFileError(f'Cannot save plot "{path}", format "{fmt}" is not one of {supported_formats()}')
	return path


def plot_spectrum(values : np.ndarray, path : str | Path, title : str = 'Spectrum') -> Path:
	"""
	Save the spectrum figure of `values` to `path`, the format is taken from
	the file extension.
	"""
	path = check_plot_path(path)
	fig = create_spectrum_figure(values, title)
	try:
		fig.savefig(path)
	except OSError as e:
		raise SampleFileError(f'Failed to write plot "{path}": {e.strerror}') from e
	except ValueError as e:
		raise SampleFileError(f'Failed to write plot "{path}": {e}') from e
	_lgr.info(f'Spectrum plot written to "{path}"')
	return path
