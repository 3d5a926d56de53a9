"""Command line interface for quant-env."""
