"""
Utilities package for dkutils.

Module-level functions grouped by concern. Import from the submodules for the
full set; the most used helpers are re-exported here.
"""

from .file_operations import (
    copy_file_with_progress,
    move_file_with_progress,
    copy_files,
    move_files,
    calculate_directory_size,
    create_directory,
    create_file,
    read_string_from_file,
    write_string_to_file,
    copy_file_async,
    copy_files_async,
    move_files_async,
)

from .progress_utils import (
    ProgressListener,
    ProgressAggregator,
    format_bytes,
)

from .common_utils import (
    is_empty,
    is_not_empty,
    is_strings_equal,
    is_strings_equal_ignore_case,
    capitalize,
)

from .date_time_utils import (
    DateTimeUtils,
    is_valid_date_format,
)

from .json_utils import (
    JsonCodec,
    to_json,
    to_json_pretty,
    from_json,
    from_json_list,
    from_json_map,
)

__all__ = [
    # File operations
    "copy_file_with_progress",
    "move_file_with_progress",
    "copy_files",
    "move_files",
    "calculate_directory_size",
    "create_directory",
    "create_file",
    "read_string_from_file",
    "write_string_to_file",
    "copy_file_async",
    "copy_files_async",
    "move_files_async",
    # Progress utilities
    "ProgressListener",
    "ProgressAggregator",
    "format_bytes",
    # Common helpers
    "is_empty",
    "is_not_empty",
    "is_strings_equal",
    "is_strings_equal_ignore_case",
    "capitalize",
    # Dates
    "DateTimeUtils",
    "is_valid_date_format",
    # JSON
    "JsonCodec",
    "to_json",
    "to_json_pretty",
    "from_json",
    "from_json_list",
    "from_json_map",
]
