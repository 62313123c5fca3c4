"""Toolkit-independent building blocks of a system monitor: load graphs,
scale helpers, disk usage, cgroup names, colour pickers, options and state."""

__version__ = "1.28.1"

__all__ = [
    "cgroups",
    "colorbutton",
    "colors",
    "disks",
    "loadgraph",
    "monitor",
    "netscale",
    "options",
]