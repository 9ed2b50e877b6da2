# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""FFIEnum: Python enum bindings and byte-buffer codecs generated from enum descriptors."""

__version__ = "0.1.0"
