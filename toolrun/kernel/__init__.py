"""Kernel: core execution machinery."""
