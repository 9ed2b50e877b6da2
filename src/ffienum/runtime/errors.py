# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised by generated codecs."""

# ###############
# Public Interface
# ###############


class InternalError(Exception):
    """Raised when bytes on the wire do not match the schema a decoder was generated from.

    This signals version skew between encoder and decoder, a corrupted
    transport, or an encoder bug. It is never recovered from locally.
    """
