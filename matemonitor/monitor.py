"""Main-window state: tabs, refresh timers, selection and saved settings."""

from __future__ import annotations

import enum
from typing import Optional, Sequence

from matemonitor.colors import RGBA
from matemonitor.loadgraph import GraphType, LoadGraph


class Priority(enum.IntEnum):
    """Entries of the "Change Priority" menu."""

    VERY_HIGH = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3
    VERY_LOW = 4
    CUSTOM = 5


class Tab(enum.IntEnum):
    """Pages of the main notebook, in display order."""

    SYSINFO = 0
    PROCESSES = 1
    RESOURCES = 2
    DISKS = 3


class WhoseProcesses(enum.IntEnum):
    """Which processes the process list shows."""

    ALL = 0
    MY = 1
    ACTIVE = 2


_NICE_FOR_PRIORITY = {
    Priority.VERY_HIGH: -20,
    Priority.HIGH: -5,
    Priority.NORMAL: 0,
    Priority.LOW: 5,
    Priority.VERY_LOW: 19,
}

SELECTED_ACTIONS = (
    "StopProcess",
    "ContProcess",
    "EndProcess",
    "KillProcess",
    "ChangePriority",
    "MemoryMaps",
    "OpenFiles",
    "ProcessProperties",
)

PROCESSES_ACTIONS = (
    "ShowActiveProcesses",
    "ShowAllProcesses",
    "ShowMyProcesses",
    "ShowDependencies",
    "Refresh",
)

END_PROCESS_BUTTON = "EndProcessButton"


def nice_for_priority(priority: Priority | int) -> int:
    """Return the nice value a preset priority stands for.

    Raises ValueError for the custom priority, which needs a value from
    the user.
    """
    priority = Priority(priority)
    if priority is Priority.CUSTOM:
        raise ValueError("the custom priority has no preset nice value")
    return _NICE_FOR_PRIORITY[priority]


def priority_for_nice(nice: int) -> Priority:
    """Return the menu priority closest to the nice value *nice*."""
    if nice < -7:
        return Priority.VERY_HIGH
    if nice < -2:
        return Priority.HIGH
    if nice < 3:
        return Priority.NORMAL
    if nice < 7:
        return Priority.LOW
    return Priority.VERY_LOW


def color_key_for_cpu(index: int) -> str:
    """Return the settings key holding the graph colour of CPU *index*."""
    return f"cpu-color{int(index)}"


class MonitorState:
    """What the main window knows: current tab, timers, selection, settings.

    ``process_timeout`` and ``disk_timeout`` hold the period in milliseconds
    of the refresh that is running, or None when it is stopped.
    """

    def __init__(
        self,
        num_cpus: int = 1,
        update_interval: int = 3000,
        disks_update_interval: int = 5000,
        graph_update_interval: int = 1000,
    ) -> None:
        self.num_cpus = int(num_cpus)
        self.update_interval = int(update_interval)
        self.disks_update_interval = int(disks_update_interval)
        self.graph_update_interval = int(graph_update_interval)

        self.current_tab: Optional[Tab] = None
        self.whose_processes = WhoseProcesses.ACTIVE
        self.settings: dict[str, object] = {}

        self.process_timeout: Optional[int] = None
        self.disk_timeout: Optional[int] = None
        self.process_refreshes = 0
        self.disk_refreshes = 0
        self.sysinfo_built = False
        self.terminating = False

        self.selected_count = 0
        self.selected_priority: Optional[Priority] = None

        self.cpu_graph = LoadGraph(GraphType.CPU, self.num_cpus, self.graph_update_interval)
        self.mem_graph = LoadGraph(GraphType.MEM, update_interval=self.graph_update_interval)
        self.net_graph = LoadGraph(GraphType.NET, update_interval=self.graph_update_interval)

    @property
    def graphs(self) -> tuple[LoadGraph, LoadGraph, LoadGraph]:
        """The CPU, memory and network graphs."""
        return self.cpu_graph, self.mem_graph, self.net_graph

    def _refresh_processes(self) -> None:
        if not self.terminating:
            self.process_refreshes += 1

    def _refresh_disks(self) -> None:
        if not self.terminating:
            self.disk_refreshes += 1

    def switch_tab(self, tab: Tab | int) -> None:
        """Show page *tab*, starting the refreshes it needs and stopping others."""
        tab = Tab(tab)
        self.current_tab = tab

        if tab is Tab.PROCESSES:
            self._refresh_processes()
            if self.process_timeout is None and not self.terminating:
                self.process_timeout = self.update_interval
        else:
            self.process_timeout = None

        for graph in self.graphs:
            if tab is Tab.RESOURCES:
                graph.start()
            else:
                graph.stop()

        if tab is Tab.DISKS:
            self._refresh_disks()
            if self.disk_timeout is None and not self.terminating:
                self.disk_timeout = self.disks_update_interval
        else:
            self.disk_timeout = None

        if tab is Tab.SYSINFO:
            self.sysinfo_built = True

    def select(self, nices: Sequence[int]) -> Optional[Priority]:
        """Select processes with the nice values *nices*, in selection order.

        The priority menu follows the last selected process; its priority
        is returned, or None when nothing is selected.
        """
        values = list(nices)
        self.selected_count = len(values)
        self.selected_priority = priority_for_nice(values[-1]) if values else None
        return self.selected_priority

    def sensitivity(self) -> dict[str, bool]:
        """Return which actions (and the end-process button) are enabled."""
        processes = self.current_tab is Tab.PROCESSES
        selected = processes and self.selected_count > 0
        result = {name: processes for name in PROCESSES_ACTIONS}
        result.update((name, selected) for name in SELECTED_ACTIONS)
        result[END_PROCESS_BUTTON] = selected
        return result

    def set_whose_processes(self, whose: WhoseProcesses | int) -> None:
        """Choose which processes are listed and remember the choice."""
        self.whose_processes = WhoseProcesses(whose)
        self.settings["view-as"] = int(self.whose_processes)

    def set_color(self, key: str, color: RGBA) -> None:
        """Store a graph colour under settings key *key*."""
        self.settings[key] = color.to_string()

    def close(self) -> None:
        """Save the configuration and stop every refresh before quitting."""
        if self.current_tab is not None:
            self.settings["current-tab"] = int(self.current_tab)
        self.settings["view-as"] = int(self.whose_processes)
        self.process_timeout = None
        self.disk_timeout = None
        self.terminating = True