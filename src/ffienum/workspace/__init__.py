# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration for FFIEnum."""

from ffienum.workspace.config import (
    WORKSPACE_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_workspace_config_text,
    load_workspace_config,
)

__all__ = [
    "WORKSPACE_FILE_NAME",
    "WorkspaceConfig",
    "WorkspaceConfigError",
    "default_workspace_config_text",
    "load_workspace_config",
]
