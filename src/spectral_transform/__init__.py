"""
Threaded spectral transforms of sample sequences.

Two engines are provided:
- `spectral_transform.recursive_transform`, a recursive radix-2 transform that
  forks concurrent branches at a chosen level of its recursion tree.
- `spectral_transform.direct_transform`, a direct summation transform whose
  output indices are split into contiguous chunks, one per worker.

`spectral_transform.driver` wires either engine to the sample file reader and
writer, `python -m spectral_transform` is the command line entry point.
"""
