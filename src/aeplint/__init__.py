# SPDX-License-Identifier: MIT
"""aeplint — lint protocol buffer APIs against API Enhancement Proposals."""

__version__ = "0.1.0"
