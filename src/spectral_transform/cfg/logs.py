"""
Logging setup for the package
"""
import types
import logging

import spectral_transform.cfg.settings

pkg_name = __name__.split('.',1)[0]
pkg_lgr = logging.getLogger(pkg_name)
pkg_lgr.propagate = False

pkg_lgr.setLevel(spectral_transform.cfg.settings.log_level)

pkg_stream_hdlr = logging.StreamHandler()
pkg_stream_hdlr.setLevel(logging.DEBUG)

pkg_stream_hdlr_formatter = logging.Formatter(
	fmt="%(asctime)s %(filename)s:%(lineno)d \"%(funcName)s\" %(levelname)s: %(message)s",
	datefmt="%Y-%m-%dT%H:%M:%S %z",
)
pkg_stream_hdlr.setFormatter(pkg_stream_hdlr_formatter)


pkg_lgr.addHandler(pkg_stream_hdlr)


def _logger_name(name : str | types.ModuleType) -> str:
	if type(name) is types.ModuleType:
		name = name.__name__
	if name.split('.',1)[0] != pkg_name:
		raise RuntimeError(f'Logger "{name}" is not a child of "{pkg_name}"')
	return name


def get_logger_at_level(name : str | types.ModuleType, level : str|int = logging.NOTSET) -> logging.Logger:
	"""
	Return the `name`d logger that reports `level` logs
	"""
	_lgr = logging.getLogger(_logger_name(name))
	_lgr.setLevel(level)
	return _lgr

def set_logger_at_level(name : str | types.ModuleType, level : str|int = logging.NOTSET) -> None:
	"""
	Set the logger with `name` to report `level` logs
	"""
	get_logger_at_level(name, level)
	return None

def set_package_level(level : str|int) -> None:
	"""
	Set the package logger and every logger below it to report `level` logs
	"""
	pkg_lgr.setLevel(level)
	for name, lgr in logging.root.manager.loggerDict.items():
		if isinstance(lgr, logging.Logger) and name.startswith(pkg_name+'.'):
			lgr.setLevel(level)
	return None
