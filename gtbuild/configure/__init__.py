# SPDX-License-Identifier: MIT
"""Configure phase: build options, host probing and compiler identification."""
