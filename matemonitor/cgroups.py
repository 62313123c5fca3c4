"""Control-group membership of processes, read from /proc/<pid>/cgroup."""

from __future__ import annotations

import functools
import os
from typing import Optional

PROC_ROOT = "/proc"


@functools.lru_cache(maxsize=None)
def _has_cgroups_file(proc_root: str) -> bool:
    return os.path.exists(os.path.join(proc_root, "cgroups"))


def cgroups_enabled(proc_root: str = PROC_ROOT) -> bool:
    """Return True if the kernel exposes control groups under *proc_root*.

    The answer is computed once per root and then remembered.
    """
    return _has_cgroups_file(str(proc_root))


def _split_line(line: str) -> Optional[tuple[str, str]]:
    """Split a ``hierarchy:controllers:path`` line into controllers and path."""
    parts = line.split(":", 2)
    if len(parts) < 3:
        return None
    return parts[1], parts[2]


def append_cgroup_name(line: str, current: Optional[str]) -> Optional[str]:
    """Merge one cgroup line into the display name *current* and return it.

    Root cgroups and named (``name=``) hierarchies are left out.  Controllers
    sharing a path are grouped as ``path (ctl1/ctl2)``; distinct paths are
    joined with ``", "``.
    """
    split = _split_line(line)
    if split is None:
        return current
    controller, path = split
    controller = controller.replace(",", "/")

    if path == "/" or controller.startswith("name="):
        return current

    if current is None:
        return f"{path} ({controller})"

    path_plus_space = f"{path} "
    start = current.find(path_plus_space)
    if start != -1:
        paren = current.find(")", start + len(path))
        if paren == -1:
            return f"{current}/{controller})"
        return f"{current[:paren]}/{controller}){current[paren + 1:]}"
    return f"{current}, {path_plus_space}({controller})"


def cgroup_changed(line: str, current: Optional[str]) -> bool:
    """Return True if *line* is not already described by *current*."""
    split = _split_line(line)
    if split is None:
        return True
    controller, path = split

    if controller.startswith("name="):
        return False

    # Several controllers on one line: report a change rather than match.
    if "," in controller:
        return True

    if current is None:
        return path != "/"

    if path == "/":
        # A controller in the root group must not appear inside any listed group.
        pos = 0
        while (found := current.find(controller, pos)) != -1:
            close_paren = current.find(")", found)
            open_paren = current.find("(", found)
            if close_paren != -1 and (open_paren == -1 or close_paren < open_paren):
                return True
            pos = found + len(controller)
        return False

    pos = 0
    while (found := current.find(path, pos)) != -1:
        found += len(path)
        close_paren = current.find(")", found)
        if current[found:found + 1] == " ":
            group = current[found + 1:] if close_paren == -1 else current[found + 1:close_paren + 1]
            if controller in group:
                return False
        if close_paren == -1:
            break
        pos = close_paren + 1
    return True


def cgroup_name_from_text(text: str, current: Optional[str]) -> Optional[str]:
    """Compute the display name for the contents of a cgroup file.

    *current* is returned untouched when every line is already described by
    it; otherwise the name is rebuilt from all lines ("" if nothing is left).
    """
    lines = [line for line in text.split("\n") if line]
    if not any(cgroup_changed(line, current) for line in lines):
        return current

    name: Optional[str] = None
    for line in lines:
        name = append_cgroup_name(line, name)
    return name if name is not None else ""


def process_cgroup_name(
    pid: int, current: Optional[str] = None, proc_root: str = PROC_ROOT
) -> Optional[str]:
    """Return the cgroup display name of process *pid*.

    *current* is the name known so far; it comes back unchanged when cgroups
    are unavailable, the file cannot be read, or nothing changed.
    """
    if not cgroups_enabled(proc_root):
        return current
    path = os.path.join(str(proc_root), str(pid), "cgroup")
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError:
        return current
    return cgroup_name_from_text(text, current)