"""
Default settings for the package, command line options override these for a
single run.
"""
import os

# Engine used when none is requested, "fft" (recursive) or "ft" (direct)
default_engine : str = 'fft'

# Fork policy of the recursive engine, "level" or "budget"
default_policy : str = 'level'

# Number of decimal places written for each real and imaginary part
default_precision : int = 6

# Level of the package logger
log_level : str = os.environ.get('SPECTRAL_TRANSFORM_LOG_LEVEL', 'WARNING').upper()
