"""Utility helpers for quant-env."""
