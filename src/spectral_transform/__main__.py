"""
Compute the spectral transform of a sample file.

The input file holds the number of samples followed by the samples, the output
file receives the number of values followed by one "real imaginary" line per
transformed value.
"""

import sys
import argparse
from pathlib import Path

from spectral_transform.exceptions import SpectralTransformError
from spectral_transform.driver import ENGINES, TransformDriver
from spectral_transform.scheduling import spawner_classes
import spectral_transform.plot
import spectral_transform.cfg.settings
import spectral_transform.cfg.logs
_lgr = spectral_transform.cfg.logs.get_logger_at_level(__name__, 'INFO')


def positive_int(value : str) -> int:
	try:
		ivalue = int(value)
	except ValueError:
		raise argparse.ArgumentTypeError(f'"{value}" is not an integer')
	if ivalue < 1:
		raise argparse.ArgumentTypeError(f'must be at least 1, have {ivalue}')
	return ivalue


def parse_args(argv):
	parser = argparse.ArgumentParser(
		prog='spectral_transform',
		description=__doc__,
		formatter_class=argparse.RawTextHelpFormatter,
	)

	parser.add_argument('input_path', type=Path, help='Sample file to transform')
	parser.add_argument('output_path', type=Path, help='File to write the transformed sequence to')
	parser.add_argument('threads', type=positive_int, help='Thread budget, a positive integer')

	parser.add_argument('--engine', choices=ENGINES, default=spectral_transform.cfg.settings.default_engine,
		help='"fft" uses the recursive transform (number of samples must be a power of two), "ft" uses direct summation'
	)
	parser.add_argument('--policy', choices=tuple(spawner_classes.keys()), default=spectral_transform.cfg.settings.default_policy,
		help='\n'.join((
			'Where the recursive transform forks threads',
			'	level : only at the recursion level with exactly `threads` nodes',
			'	budget : at any level while part of the thread budget is unused',
			'	sequential : never',
		))
	)
	parser.add_argument('--precision', type=int, default=spectral_transform.cfg.settings.default_precision, help='Decimal places written for each real and imaginary part')
	parser.add_argument('--plot', type=Path, default=None, help='If present, save a plot of the transformed sequence to this path')
	parser.add_argument('--log_level', type=str.upper, default=spectral_transform.cfg.settings.log_level,
		choices=('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'), help='Level of log messages reported on stderr'
	)

	args = parser.parse_args(argv)

	if args.precision < 0:
		parser.error(f'--precision must not be negative, have {args.precision}')

	return args


def main(argv=None) -> int:
	"""
	Run the tool, returns the exit status: 0 on success, 1 when the run failed.
	Invalid command line arguments exit with status 2.
	"""
	args = parse_args(sys.argv[1:] if argv is None else argv)
	spectral_transform.cfg.logs.set_package_level(args.log_level)

	for k,v in vars(args).items():
		_lgr.debug(f'{k} = {v}')

	try:
		if args.plot is not None:
			spectral_transform.plot.check_plot_path(args.plot)

		driver = TransformDriver(
			threads = args.threads,
			engine = args.engine,
			policy = args.policy,
			precision = args.precision,
		)
		result = driver.run_files(args.input_path, args.output_path)

		if args.plot is not None:
			spectral_transform.plot.plot_spectrum(result, args.plot, title=f'{args.engine} of "{args.input_path.name}"')

	except SpectralTransformError as e:
		_lgr.error(str(e))
		return 1

	return 0


def console_entry():
	sys.exit(main())


if __name__ == '__main__':
	console_entry()
