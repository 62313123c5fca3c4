# matemonitor

The logic behind a desktop system monitor, free of any toolkit. Each module
works on plain values, so it can be driven from tests or from any user
interface; the few functions that read the live system use `psutil`, `/proc`
and `os.statvfs`.

## Modules

- **`matemonitor.loadgraph`**: `LoadGraph` keeps a rolling history of
  `LoadGraph.NUM_POINTS` (62) samples for a CPU, memory or network graph
  (`GraphType.CPU`, `GraphType.MEM`, `GraphType.NET`). It computes the grid
  geometry (`configure`, `layout`), the axis captions (`axis_labels`,
  `time_labels`) and the text labels, and rescales the network graph to a
  tidy maximum (`net_scale`). Samples go in through `update_cpu`,
  `update_memory` and `update_net`, or through `tick`, which samples once
  every ten frames. `sample_cpu`, `sample_memory` and `sample_net` read the
  live figures with `psutil`.
- **`matemonitor.netscale`**: `nicenum`, `num_bars`, `round_net_max`,
  `format_size` (decimal units, bytes or bits), `format_size_iec` (binary
  units) and `memory_label`.
- **`matemonitor.disks`**: `parse_mounts` and `read_mounts` for a mount table
  in the `/proc/mounts` format, `read_fsusage` (via `statvfs`),
  `fsusage_stats` for byte sizes and the used percentage, `subvolume_for` for
  a `subvol=` mount option, and `DiskList`, whose rows (`DiskRow`) keep their
  place across refreshes. File systems without blocks are dropped unless
  `show_all_fs` is set.
- **`matemonitor.cgroups`**: `cgroup_name_from_text` and
  `process_cgroup_name` build the readable cgroup name of a process from
  `/proc/<pid>/cgroup`, and only rebuild it when `cgroup_changed` finds a line
  the current name does not describe. `cgroups_enabled` checks for
  `/proc/cgroups`.
- **`matemonitor.colors`**: `RGBA` with `to_string` and `parse` (hex,
  `rgb()`, `rgba()`, `transparent`), `highlight`, `encode_drag_data` /
  `decode_drag_data` for `application/x-color` data, `drag_icon_pixel` and
  the `PickerType` enum.
- **`matemonitor.colorbutton`**: `ColorButton`, the state of a colour picker:
  colour, pie fraction, hover highlight, press/release click detection, a
  chooser that is opened by a click and closed with `choose`, and handlers
  registered with `connect` that run whenever the user sets a colour.
- **`matemonitor.options`**: `build_parser` and `parse_args` for the
  tab-selection options `-s/--show-system-tab`, `-p/--show-processes-tab`,
  `-r/--show-resources-tab` and `-f/--show-file-systems-tab`, returned as
  `TabOptions`.
- **`matemonitor.monitor`**: `MonitorState` tracks the current `Tab`, which
  refreshes are running (as their periods in milliseconds), starts and stops
  drawing of the three load graphs, follows the priority of the selected
  process, reports which actions are enabled (`sensitivity`) and keeps the
  settings to save in a dictionary. `priority_for_nice`, `nice_for_priority`
  and `color_key_for_cpu` map between menu entries, nice values and settings
  keys.

## Examples

Cgroup names from the contents of a `/proc/<pid>/cgroup` file:

```python
from matemonitor.cgroups import cgroup_name_from_text

name = cgroup_name_from_text("4:cpu,cpuacct:/user.slice\n", None)
print(name)  # /user.slice (cpu/cpuacct)
```

Rounding a network graph maximum to a value that divides evenly into ticks:

```python
from matemonitor.netscale import nicenum, round_net_max

nicenum(3.2, True)                # 5.0
round_net_max(150_000, 5, False)  # a tidy maximum in bytes per second
```

A CPU graph fed by live samples:

```python
from matemonitor.loadgraph import GraphType, LoadGraph, sample_cpu

graph = LoadGraph(GraphType.CPU, 4, 1000, False, None)
graph.configure(600, 200)
graph.start(lambda: sample_cpu(4))
for _ in range(10):
    graph.tick(lambda: sample_cpu(4))
print(graph.cpu_labels)
```

Parsing the tab options:

```python
from matemonitor.options import parse_args

options = parse_args(["--show-resources-tab"])
print(options.show_resources_tab)  # True
```

Mapping a nice value to a priority level for a menu:

```python
from matemonitor.monitor import nice_for_priority, priority_for_nice

priority = priority_for_nice(-10)  # Priority.VERY_HIGH
nice_for_priority(priority)        # -20
```

## What it does not do

- There is no command to run and no window: nothing draws the graphs or
  pickers, and `parse_args` only returns the chosen options.
- Nothing runs on a timer. `MonitorState` records refresh periods and
  `LoadGraph.interval` gives the frame period, but the caller has to call
  `tick` and refresh the lists itself.
- There is no process list: processes are not enumerated, and nothing stops,
  continues, kills or renices them. `MonitorState.select` takes the nice
  values of a selection made elsewhere.
- Settings are kept in `MonitorState.settings` in memory only; they are not
  written to disk.