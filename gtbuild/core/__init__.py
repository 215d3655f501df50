# SPDX-License-Identifier: MIT
"""Core build model: targets, tests, flags and the flag resolver."""
