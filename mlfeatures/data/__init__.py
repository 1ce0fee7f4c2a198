"""
Example data used by the user guide and the example runner.

This subpackage provides small in-memory DataFrames mirroring the inputs
shown in docs/ml-features.md.
"""
