"""File-system list: mounted devices with their size and usage."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional, Sequence

DEFAULT_ICON = "drive-harddisk"
MOUNTS_FILE = "/proc/mounts"

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


@dataclass(frozen=True)
class MountEntry:
    """One mounted file system."""

    devname: str
    mountdir: str
    type: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class FsUsage:
    """Block counts of a file system, as reported by statvfs."""

    blocks: int = 0
    bfree: int = 0
    bavail: int = 0
    block_size: int = 0


@dataclass(frozen=True)
class DiskStats:
    """Sizes in bytes and the used percentage of a file system."""

    total: int = 0
    free: int = 0
    avail: int = 0
    used: int = 0
    percentage: int = 0


@dataclass
class DiskRow:
    """One row of the file-system list."""

    device: str
    directory: str
    type: str
    subvolume: str
    total: int
    free: int
    avail: int
    used: int
    percentage: int
    icon: str = DEFAULT_ICON


def fsusage_stats(usage: FsUsage) -> DiskStats:
    """Turn block counts into byte sizes and a used percentage."""
    total = usage.blocks * usage.block_size
    if not total:
        # not a real device
        return DiskStats()
    free = usage.bfree * usage.block_size
    avail = usage.bavail * usage.block_size
    used = total - free
    denominator = used + avail
    percent = 100 * used // denominator if denominator else 0
    return DiskStats(total, free, avail, used, min(max(percent, 0), 100))


def _unescape(field_text: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field_text)


def parse_mounts(text: str) -> list[MountEntry]:
    """Parse a mount table in the /proc/mounts (fstab) format."""
    entries = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        fields = stripped.split()
        if len(fields) < 3:
            continue
        options = tuple(opt for opt in fields[3].split(",") if opt) if len(fields) > 3 else ()
        entries.append(
            MountEntry(
                devname=_unescape(fields[0]),
                mountdir=_unescape(fields[1]),
                type=_unescape(fields[2]),
                options=options,
            )
        )
    return entries


def subvolume_for(entry: MountEntry, mounts: Iterable[MountEntry]) -> Optional[str]:
    """Return the ``subvol`` mount option of *entry*, or None.

    The first mount with the same directory and device is consulted; a
    ``/root`` sub-volume is shown as ``/``.
    """
    for mount in mounts:
        if mount.mountdir == entry.mountdir and mount.devname == entry.devname:
            for option in mount.options:
                name, sep, value = option.partition("=")
                if name == "subvol" and sep:
                    return "/" if value == "/root" else value
            return None
    return None


def read_mounts(path: str = MOUNTS_FILE) -> list[MountEntry]:
    """Read the mount table at *path*; an unreadable table is empty."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return parse_mounts(handle.read())
    except OSError:
        return []


def read_fsusage(mountdir: str) -> FsUsage:
    """Query block usage of the file system at *mountdir*; zeros on failure."""
    try:
        st = os.statvfs(mountdir)
    except OSError:
        return FsUsage()
    return FsUsage(
        blocks=st.f_blocks,
        bfree=st.f_bfree,
        bavail=st.f_bavail,
        block_size=st.f_frsize,
    )


@dataclass
class DiskList:
    """Rows of mounted file systems, kept in a stable order."""

    _rows: list[DiskRow] = field(default_factory=list)

    def __init__(self) -> None:
        self._rows = []

    def find(self, mountdir: str) -> Optional[DiskRow]:
        """Return the row mounted at *mountdir*, if any."""
        return next((row for row in self._rows if row.directory == mountdir), None)

    def remove_old(self, entries: Iterable[MountEntry]) -> None:
        """Drop rows whose mount point is no longer among *entries*."""
        current = {entry.mountdir for entry in entries}
        self._rows = [row for row in self._rows if row.directory in current]

    def add(
        self,
        entry: MountEntry,
        usage: FsUsage,
        show_all_fs: bool = False,
        subvolume: Optional[str] = None,
    ) -> Optional[DiskRow]:
        """Insert or refresh the row for *entry* and return it.

        Pseudo file systems without blocks are removed instead, unless
        *show_all_fs* is set; None is returned then.  A refreshed row keeps
        its place in the list.
        """
        if not show_all_fs and usage.blocks == 0:
            self._rows = [row for row in self._rows if row.directory != entry.mountdir]
            return None

        stats = fsusage_stats(usage)
        row = DiskRow(
            device=entry.devname,
            directory=entry.mountdir,
            type=entry.type,
            subvolume=subvolume or "",
            total=stats.total,
            free=stats.free,
            avail=stats.avail,
            used=stats.used,
            percentage=stats.percentage,
        )
        for index, existing in enumerate(self._rows):
            if existing.directory == entry.mountdir:
                self._rows[index] = row
                break
        else:
            self._rows.append(row)
        return row

    def update(
        self,
        entries: Sequence[MountEntry],
        usage_for: Callable[[str], FsUsage] = read_fsusage,
        show_all_fs: bool = False,
        mounts: Optional[Sequence[MountEntry]] = None,
    ) -> None:
        """Bring the list in line with *entries*.

        *usage_for* gives the usage of a mount point; *mounts* is the table
        searched for sub-volumes and defaults to *entries* themselves.
        """
        table = entries if mounts is None else mounts
        self.remove_old(entries)
        for entry in entries:
            self.add(entry, usage_for(entry.mountdir), show_all_fs, subvolume_for(entry, table))

    def __iter__(self) -> Iterator[DiskRow]:
        return iter(list(self._rows))

    def __len__(self) -> int:
        return len(self._rows)