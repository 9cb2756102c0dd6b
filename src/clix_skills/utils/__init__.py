# ABOUTME: Utility modules for clix_skills
# ABOUTME: Exports the filesystem capability and backup functions

from clix_skills.utils.backup import cleanup_old_backups, create_backup, get_backup_dir
from clix_skills.utils.fs import FileSystem, LocalFileSystem

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "create_backup",
    "cleanup_old_backups",
    "get_backup_dir",
]
