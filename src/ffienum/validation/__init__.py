# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Wire compatibility checks for evolving enum descriptors."""

from ffienum.validation.compat import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_compatibility,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_compatibility",
]
