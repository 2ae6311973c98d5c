# SPDX-License-Identifier: MIT
"""Textual host for the freshness core."""
