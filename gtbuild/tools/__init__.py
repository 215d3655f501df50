# SPDX-License-Identifier: MIT
"""Toolchain protocol, identity and registry."""
