"""Hogbom CLEAN deconvolution with interchangeable peak-finding strategies and a benchmark runner."""

__version__ = "0.1.0"