import logging

import spectral_transform.cfg.logs as logs


def test_get_logger_only_for_package_modules():
	lgr = logs.get_logger_at_level('spectral_transform.some_module', 'INFO')
	assert lgr.level == logging.INFO, f"Logger should be at INFO, is at {lgr.level}"
	
	try:
		logs.get_logger_at_level('numpy', 'DEBUG')
	except RuntimeError:
		pass
	else:
		assert False, "Loggers outside of the package should be refused"


def test_set_package_level_applies_to_children():
	child = logs.get_logger_at_level('spectral_transform.another_module', 'DEBUG')
	original = logs.pkg_lgr.level
	try:
		logs.set_package_level('ERROR')
		assert child.level == logging.ERROR, f"Child logger should follow the package level, is at {child.level}"
		assert logs.pkg_lgr.level == logging.ERROR
	finally:
		logs.set_package_level(original)


def test_package_logger_does_not_propagate():
	assert logs.pkg_lgr.propagate is False
	assert len(logs.pkg_lgr.handlers) == 1, "Package logger should have a single stream handler"
