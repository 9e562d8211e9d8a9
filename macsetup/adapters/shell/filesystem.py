"""
Filesystem helpers — the local side effects install actions are allowed.

Shell profile edits are append-only and idempotent: a line already
present is never written twice, so re-running an install is harmless.
"""

from __future__ import annotations

import logging
from pathlib import Path

from macsetup.core.errors import InstallError

logger = logging.getLogger(__name__)

SSH_KEY_PREFIXES = ("id_rsa", "id_ed25519", "id_ecdsa")


def append_line(path: Path, line: str) -> bool:
    """Append ``line`` to ``path`` unless an identical line exists.

    Returns:
        True if the file was changed.
    """
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
    except OSError as e:
        raise InstallError(f"Cannot read {path}: {e}") from e

    if line in existing.splitlines():
        logger.debug("%s already contains: %s", path, line)
        return False

    prefix = "" if not existing or existing.endswith("\n") else "\n"
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(f"{prefix}{line}\n")
    except OSError as e:
        raise InstallError(f"Cannot write {path}: {e}") from e

    logger.info("Appended to %s: %s", path, line)
    return True


def has_entries(path: Path) -> bool:
    """True if ``path`` is a directory with at least one entry."""
    if not path.is_dir():
        return False
    return any(path.iterdir())


def ssh_private_keys(ssh_dir: Path) -> list[Path]:
    """Private key files (``id_rsa*``, ``id_ed25519*``, ``id_ecdsa*``) in ``ssh_dir``."""
    if not ssh_dir.is_dir():
        return []
    return sorted(
        p for p in ssh_dir.iterdir()
        if p.is_file()
        and p.name.startswith(SSH_KEY_PREFIXES)
        and not p.name.endswith(".pub")
    )


def secure_ssh_dir(ssh_dir: Path) -> None:
    """Apply the usual ssh permissions: 700 dir, 600 keys, 644 ``*.pub``."""
    if not ssh_dir.is_dir():
        raise InstallError(f"{ssh_dir} does not exist")
    try:
        ssh_dir.chmod(0o700)
        for entry in ssh_dir.iterdir():
            if not entry.is_file():
                continue
            if entry.name.endswith(".pub"):
                entry.chmod(0o644)
            elif entry.name.startswith("id_"):
                entry.chmod(0o600)
    except OSError as e:
        raise InstallError(f"Cannot set permissions on {ssh_dir}: {e}") from e


def owner_of(path: Path) -> str | None:
    """Owning user name of ``path``, or None if it can't be determined."""
    try:
        return path.owner()
    except (OSError, KeyError, NotImplementedError):
        return None
