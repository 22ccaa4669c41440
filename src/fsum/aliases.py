from fsum.core.models import ActionMode, IndexConfig

ACTION_ALIASES = {
    "distinct": ActionMode.DISTINCT,
    "duplicate": ActionMode.DUPLICATE,
    "unique": ActionMode.UNIQUE,
    "delete": ActionMode.DELETE,
}

ACTION_HELP_TEXT = (
    "Action applied to WORKING" + IndexConfig.FILE_EXTENSION + " (optionally against a second index):\n"
    + "".join(f"  --{name:<10}: {mode.description}\n" for name, mode in ACTION_ALIASES.items())
)

ALGORITHM_HELP_TEXT = (
    "Digest algorithm written into the index. Default: " + IndexConfig.DEFAULT_ALGORITHM + "\n"
    "XXH64 / XXH3-128 are much faster but not cryptographic.\n"
)

EPILOG_TEXT = """
Examples:
  Index two directory trees (writes photos.fsum and backup.fsum)
  %(prog)s index ~/photos /mnt/backup

  One file per content inside photos (writes photos-distinct.fsum)
  %(prog)s action --distinct photos.fsum

  Files of backup already present in photos (writes backup-duplicate.fsum)
  %(prog)s action --duplicate backup.fsum photos.fsum

  Delete from disk the files of backup listed in backup-duplicate.fsum (with confirmation prompt)
  %(prog)s action --delete backup.fsum backup-duplicate.fsum

  Same as above but moving files to the system trash, without confirmation (for scripts)
  %(prog)s action --delete backup.fsum backup-duplicate.fsum --trash --force
"""
