"""Utility functions for vim-flavor"""

from .file_utils import (
    zap_name,
    flavors_path,
    repos_path,
    remove_path,
    ensure_parent_dir,
    atomic_write_text,
)

from .template_utils import (
    render_template,
    vim_string_list,
)

from .version_utils import (
    parse_version,
    sort_versions,
    get_latest_version,
)

__all__ = [
    # File utilities
    "zap_name",
    "flavors_path",
    "repos_path",
    "remove_path",
    "ensure_parent_dir",
    "atomic_write_text",

    # Template utilities
    "render_template",
    "vim_string_list",

    # Version utilities
    "parse_version",
    "sort_versions",
    "get_latest_version",
]
