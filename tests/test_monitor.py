import pytest

from matemonitor.colors import RGBA
from matemonitor.monitor import (
    MonitorState,
    Priority,
    Tab,
    WhoseProcesses,
    color_key_for_cpu,
    nice_for_priority,
    priority_for_nice,
)


@pytest.mark.parametrize(
    "priority, nice",
    [
        (Priority.VERY_HIGH, -20),
        (Priority.HIGH, -5),
        (Priority.NORMAL, 0),
        (Priority.LOW, 5),
        (Priority.VERY_LOW, 19),
    ],
)
def test_nice_for_priority(priority, nice):
    assert nice_for_priority(priority) == nice


def test_custom_priority_has_no_nice():
    with pytest.raises(ValueError):
        nice_for_priority(Priority.CUSTOM)


@pytest.mark.parametrize(
    "nice, priority",
    [
        (-8, Priority.VERY_HIGH),
        (-7, Priority.HIGH),
        (-3, Priority.HIGH),
        (-2, Priority.NORMAL),
        (2, Priority.NORMAL),
        (3, Priority.LOW),
        (6, Priority.LOW),
        (7, Priority.VERY_LOW),
    ],
)
def test_priority_for_nice_boundaries(nice, priority):
    assert priority_for_nice(nice) is priority


@pytest.mark.parametrize("priority", [p for p in Priority if p is not Priority.CUSTOM])
def test_priority_round_trip(priority):
    assert priority_for_nice(nice_for_priority(priority)) is priority


def test_color_key_for_cpu():
    assert color_key_for_cpu(0) == "cpu-color0"
    assert color_key_for_cpu(3) == "cpu-color3"


def test_processes_tab_starts_refresh():
    state = MonitorState(update_interval=1500, disks_update_interval=4000)
    state.switch_tab(Tab.PROCESSES)
    assert state.process_timeout == 1500
    assert state.disk_timeout is None
    assert state.process_refreshes == 1
    assert all(not graph.draw for graph in state.graphs)


def test_disks_tab_stops_process_refresh():
    state = MonitorState(update_interval=1500, disks_update_interval=4000)
    state.switch_tab(Tab.PROCESSES)
    state.switch_tab(Tab.DISKS)
    assert state.process_timeout is None
    assert state.disk_timeout == 4000
    assert state.disk_refreshes == 1


def test_resources_tab_draws_graphs():
    state = MonitorState()
    state.switch_tab(Tab.RESOURCES)
    assert all(graph.draw for graph in state.graphs)
    state.switch_tab(Tab.SYSINFO)
    assert all(not graph.draw for graph in state.graphs)
    assert state.sysinfo_built is True


def test_sensitivity_follows_tab_and_selection():
    state = MonitorState()
    state.switch_tab(Tab.PROCESSES)
    flags = state.sensitivity()
    assert flags["Refresh"] is True
    assert flags["KillProcess"] is False
    assert flags["EndProcessButton"] is False

    assert state.select([10, -10]) is Priority.VERY_HIGH
    flags = state.sensitivity()
    assert flags["KillProcess"] is True
    assert flags["EndProcessButton"] is True

    state.switch_tab(Tab.DISKS)
    flags = state.sensitivity()
    assert not any(flags.values())


def test_empty_selection():
    state = MonitorState()
    state.switch_tab(Tab.PROCESSES)
    assert state.select([]) is None
    assert state.sensitivity()["ChangePriority"] is False


def test_whose_processes_saved():
    state = MonitorState()
    state.set_whose_processes(WhoseProcesses.MY)
    assert state.whose_processes is WhoseProcesses.MY
    assert state.settings["view-as"] == int(WhoseProcesses.MY)


def test_set_color_stores_string():
    state = MonitorState()
    color = RGBA(1.0, 0.0, 0.0, 1.0)
    state.set_color("mem-color", color)
    assert RGBA.parse(state.settings["mem-color"]) == color


def test_close_stops_everything():
    state = MonitorState()
    state.switch_tab(Tab.PROCESSES)
    state.close()
    assert state.terminating is True
    assert state.process_timeout is None
    assert state.settings["current-tab"] == int(Tab.PROCESSES)
    refreshes = state.process_refreshes
    state.switch_tab(Tab.PROCESSES)
    assert state.process_refreshes == refreshes
    assert state.process_timeout is None


def test_invalid_tab():
    state = MonitorState()
    with pytest.raises(ValueError):
        state.switch_tab(9)