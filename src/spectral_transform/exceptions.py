"""
Exceptions raised within the spectral_transform package
"""

class SpectralTransformError(Exception):
	"""Base class for exceptions within spectral_transform package"""
	pass

class ConfigurationError(SpectralTransformError):
	"""Raised when the run is configured with invalid values (thread budget, engine, transform size)"""
	pass

class SampleFileError(SpectralTransformError):
	"""Raised when a sample file cannot be read, parsed, or written"""
	pass

class TransformAllocationError(SpectralTransformError):
	"""Raised when the work buffers for a transform cannot be allocated"""
	pass
