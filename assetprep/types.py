"""Shared type definitions."""

from collections.abc import Callable

# Progress hook for metadata computation (path, files done, total files)
ProgressHook = Callable[[str, int, int], None]
