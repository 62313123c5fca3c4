"""Rolling CPU, memory and network load graphs."""

from __future__ import annotations

import enum
import ipaddress
import math
import socket
import time
from typing import Any, Callable, Optional, Sequence

import psutil

from matemonitor.colorbutton import ColorButton
from matemonitor.colors import RGBA, PickerType
from matemonitor.netscale import (
    format_size,
    memory_label,
    num_bars as _num_bars,
    round_net_max,
)

NUM_POINTS = 60 + 2
GRAPH_MIN_HEIGHT = 40
FRAME_WIDTH = 4
FRAMES_PER_UNIT = 10

Sampler = Callable[[], Any]


class GraphType(enum.IntEnum):
    """What a load graph plots."""

    CPU = 0
    MEM = 1
    NET = 2


class LoadGraph:
    """History of load samples plus the geometry and labels used to draw it.

    ``data[0]`` holds the newest sample; each row has one value per line of
    the graph, between 0 and 1, or -1 where nothing was sampled yet.
    """

    NUM_POINTS = NUM_POINTS
    GRAPH_MIN_HEIGHT = GRAPH_MIN_HEIGHT

    def __init__(
        self,
        graph_type: GraphType | int,
        num_cpus: int = 1,
        update_interval: int = 1000,
        network_in_bits: bool = False,
        colors: Optional[Sequence[RGBA]] = None,
    ) -> None:
        self.graph_type = GraphType(graph_type)
        if self.graph_type is GraphType.CPU:
            if num_cpus < 1:
                raise ValueError("a CPU graph needs at least one CPU")
            self.n = int(num_cpus)
        else:
            self.n = 2

        if colors is None:
            colors = [RGBA() for _ in range(self.n)]
        if len(colors) != self.n:
            raise ValueError(f"expected {self.n} colours, got {len(colors)}")
        self.colors = list(colors)

        self.fontsize = 8.0
        self.rmargin = 3.5 * self.fontsize
        self.indent = 24.0
        self.speed = int(update_interval)
        self.network_in_bits = bool(network_in_bits)

        self.draw_width = 0
        self.draw_height = 0
        self.frames_per_unit = FRAMES_PER_UNIT
        self.render_counter = self.frames_per_unit - 1
        self.graph_dely = 0
        self.real_draw_height = 0
        self.graph_delx = 0.0
        self.graph_buffer_offset = 0

        self.draw = False
        self.running = False
        self.redraws = 0
        self.needs_background = True

        self.data: list[list[float]] = [[-1.0] * self.n for _ in range(NUM_POINTS)]

        self.cpu_labels = [""] * self.n if self.graph_type is GraphType.CPU else []
        self.memory_text = ""
        self.swap_text = ""
        self.net_in_text = ""
        self.net_in_total_text = ""
        self.net_out_text = ""
        self.net_out_total_text = ""

        self.mem_color_picker: Optional[ColorButton] = None
        self.swap_color_picker: Optional[ColorButton] = None
        if self.graph_type is GraphType.MEM:
            self.mem_color_picker = ColorButton(self.colors[0], PickerType.PIE)
            self.swap_color_picker = ColorButton(self.colors[1], PickerType.PIE)

        self._cpu_last: list[tuple[float, float]] = [(0.0, 0.0)] * self.n

        self.net_max = 1
        self.net_values = [0] * NUM_POINTS
        self.net_cur = 0
        self._net_last_in = 0
        self._net_last_out = 0
        self._net_time: Optional[float] = None

    def _clear_background(self) -> None:
        self.needs_background = True

    def num_bars(self) -> int:
        """Return the number of horizontal bands for the current height."""
        return _num_bars(self.draw_height, self.fontsize)

    def configure(self, width: int, height: int) -> None:
        """Take the new allocation of the drawing area in pixels."""
        self.draw_width = max(int(width) - 2 * FRAME_WIDTH, 0)
        self.draw_height = max(int(height) - 2 * FRAME_WIDTH, 0)
        self._clear_background()

    def layout(self) -> tuple[int, int, float, int]:
        """Compute the grid geometry.

        Returns (graph_dely, real_draw_height, graph_delx, graph_buffer_offset).
        """
        bars = self.num_bars()
        self.graph_dely = max(self.draw_height - 15, 0) // bars
        self.real_draw_height = self.graph_dely * bars
        self.graph_delx = (
            self.draw_width - 2.0 - self.rmargin - self.indent
        ) / (NUM_POINTS - 3)
        self.graph_buffer_offset = int(1.5 * self.graph_delx) + FRAME_WIDTH
        self.needs_background = False
        return (
            self.graph_dely,
            self.real_draw_height,
            self.graph_delx,
            self.graph_buffer_offset,
        )

    def axis_labels(self) -> list[tuple[float, str]]:
        """Return (y, caption) for each horizontal grid line, top to bottom."""
        self.layout()
        bars = self.num_bars()
        labels = []
        for i in range(bars + 1):
            if i == 0:
                y = 0.5 + self.fontsize / 2.0
            elif i == bars:
                y = i * self.graph_dely + 0.5
            else:
                y = i * self.graph_dely + self.fontsize / 2.0
            if self.graph_type is GraphType.NET:
                rate = self.net_max - (i * self.net_max // bars)
                if self.network_in_bits:
                    caption = format_size(rate * 8, bits=True)
                else:
                    caption = format_size(rate)
            else:
                caption = f"{100 - i * (100 // bars)}%"
            labels.append((y, caption))
        return labels

    def time_labels(self) -> list[tuple[float, str]]:
        """Return (x, caption) for each of the seven vertical grid lines."""
        total_seconds = self.speed * (NUM_POINTS - 2) // 1000
        width = self.draw_width - self.rmargin - self.indent
        labels = []
        for i in range(7):
            x = i * width / 6
            position = math.ceil(x) + 0.5 + self.rmargin + self.indent
            seconds = total_seconds - i * total_seconds // 6
            if i == 0:
                caption = f"{seconds} second" if seconds == 1 else f"{seconds} seconds"
            else:
                caption = str(seconds)
            labels.append((position, caption))
        return labels

    def _require(self, graph_type: GraphType) -> None:
        if self.graph_type is not graph_type:
            raise ValueError(
                f"{graph_type.name} sample given to a {self.graph_type.name} graph"
            )

    def update_cpu(self, times: Sequence[tuple[float, float]]) -> list[float]:
        """Record cumulative (total, used) CPU times, one pair per CPU.

        The load is the share of used time since the previous call; on the
        first call it is the average since boot.  Returns the loads.
        """
        self._require(GraphType.CPU)
        if len(times) != self.n:
            raise ValueError(f"expected {self.n} CPU samples, got {len(times)}")
        current = [(float(total), float(used)) for total, used in times]
        loads = []
        for i, ((now_total, now_used), (last_total, last_used)) in enumerate(
            zip(current, self._cpu_last)
        ):
            total = now_total - last_total
            used = now_used - last_used
            load = used / max(total, 1.0)
            self.data[0][i] = load
            self.cpu_labels[i] = f"{load * 100.0:.1f}%"
            loads.append(load)
        self._cpu_last = current
        return loads

    def update_memory(
        self, mem_used: int, mem_total: int, swap_used: int, swap_total: int
    ) -> None:
        """Record memory and swap usage in bytes."""
        self._require(GraphType.MEM)
        # no swap (e.g. a live system): 0 is better than NaN
        swap_percent = swap_used / swap_total if swap_total else 0.0
        mem_percent = mem_used / mem_total if mem_total else 0.0

        self.memory_text = memory_label(mem_used, mem_total, mem_percent)
        self.swap_text = memory_label(swap_used, swap_total, swap_percent)
        if self.mem_color_picker is not None:
            self.mem_color_picker.set_fraction(mem_percent)
        if self.swap_color_picker is not None:
            self.swap_color_picker.set_fraction(swap_percent)

        self.data[0][0] = mem_percent
        self.data[0][1] = swap_percent

    def _size_text(self, size: int) -> str:
        if self.network_in_bits:
            return format_size(size * 8, bits=True)
        return format_size(size)

    def update_net(self, bytes_in: int, bytes_out: int, now: float) -> tuple[int, int]:
        """Record cumulative byte counters read at time *now* (seconds).

        Returns the rates (in, out) in bytes per second; both are 0 on the
        first call or when a counter went backwards.
        """
        self._require(GraphType.NET)
        if (
            bytes_in >= self._net_last_in
            and bytes_out >= self._net_last_out
            and self._net_time is not None
            and now > self._net_time
        ):
            dtime = now - self._net_time
            din = int((bytes_in - self._net_last_in) / dtime)
            dout = int((bytes_out - self._net_last_out) / dtime)
        else:
            din = dout = 0

        self._net_last_in = bytes_in
        self._net_last_out = bytes_out
        self._net_time = now

        self.net_scale(din, dout)

        self.net_in_text = f"{self._size_text(din)}/s"
        self.net_in_total_text = self._size_text(bytes_in)
        self.net_out_text = f"{self._size_text(dout)}/s"
        self.net_out_total_text = self._size_text(bytes_out)
        return din, dout

    def net_scale(self, din: int, dout: int) -> None:
        """Store the newest rates and rescale the graph when needed."""
        self.data[0][0] = din / self.net_max
        self.data[0][1] = dout / self.net_max

        dmax = max(din, dout)
        self.net_values[self.net_cur] = dmax
        self.net_cur = (self.net_cur + 1) % NUM_POINTS

        new_max = dmax if dmax >= self.net_max else max(self.net_values)
        new_max = round_net_max(new_max, self.num_bars(), self.network_in_bits)

        # same or slightly smaller maximum: avoid rescaling
        if 0.8 * self.net_max < new_max <= self.net_max:
            return

        scale = self.net_max / new_max
        for row in self.data:
            if row[0] >= 0.0:
                row[0] *= scale
                row[1] *= scale

        self.net_max = new_max
        self._clear_background()

    def shift(self) -> None:
        """Move every sample one step back to make room for a new one."""
        self.data = [self.data[-1]] + self.data[:-1]

    def _default_sampler(self) -> Sampler:
        if self.graph_type is GraphType.CPU:
            return lambda: sample_cpu(self.n)
        if self.graph_type is GraphType.MEM:
            return sample_memory
        return sample_net

    def tick(self, sampler: Optional[Sampler] = None) -> bool:
        """Advance one animation frame, sampling once per unit of frames.

        *sampler* returns what the graph type takes: (total, used) pairs for
        CPU, the four byte counts for memory, (in, out) bytes for network.
        """
        if self.render_counter == self.frames_per_unit - 1:
            self.shift()
            sample = (sampler or self._default_sampler())()
            if self.graph_type is GraphType.CPU:
                self.update_cpu(sample)
            elif self.graph_type is GraphType.MEM:
                self.update_memory(*sample)
            else:
                bytes_in, bytes_out = sample
                self.update_net(bytes_in, bytes_out, time.monotonic())

        if self.draw:
            self.redraws += 1

        self.render_counter += 1
        if self.render_counter >= self.frames_per_unit:
            self.render_counter = 0
        return True

    def start(self, sampler: Optional[Sampler] = None) -> None:
        """Start polling (sampling at once the first time) and drawing."""
        if not self.running:
            self.tick(sampler)
            self.running = True
        self.draw = True

    def stop(self) -> None:
        """Stop drawing; polling goes on."""
        self.draw = False

    def change_speed(self, speed: int) -> None:
        """Set the sampling period in milliseconds."""
        if self.speed == speed:
            return
        self.speed = int(speed)
        self._clear_background()

    def interval(self) -> int:
        """Return the time between frames in milliseconds."""
        return self.speed // self.frames_per_unit


def _cpu_pair(times: Any) -> tuple[float, float]:
    total = float(sum(times))
    used = times.user + getattr(times, "nice", 0.0) + times.system
    return total, float(used)


def sample_cpu(num_cpus: int = 1) -> list[tuple[float, float]]:
    """Return cumulative (total, used) CPU times, overall or per CPU."""
    if num_cpus <= 1:
        return [_cpu_pair(psutil.cpu_times())]
    per_cpu = psutil.cpu_times(percpu=True)
    pairs = [_cpu_pair(times) for times in per_cpu[:num_cpus]]
    pairs.extend([(0.0, 0.0)] * (num_cpus - len(pairs)))
    return pairs


def sample_memory() -> tuple[int, int, int, int]:
    """Return (memory used, memory total, swap used, swap total) in bytes."""
    memory = psutil.virtual_memory()
    swap = psutil.swap_memory()
    return int(memory.used), int(memory.total), int(swap.used), int(swap.total)


def _counts_interface(addresses: Sequence[Any]) -> bool:
    has_address = False
    for address in addresses:
        if address.family not in (socket.AF_INET, socket.AF_INET6):
            continue
        try:
            ip = ipaddress.ip_address(address.address.split("%", 1)[0])
        except ValueError:
            continue
        if ip.is_loopback:
            return False
        if address.family == socket.AF_INET or not ip.is_link_local:
            has_address = True
    return has_address


def sample_net() -> tuple[int, int]:
    """Return total bytes received and sent by non-loopback interfaces.

    Interfaces without an IPv4 address or a non-link-local IPv6 address
    are left out; interfaces that are down still count.
    """
    counters = psutil.net_io_counters(pernic=True)
    addresses = psutil.net_if_addrs()
    total_in = total_out = 0
    for name, counter in counters.items():
        if not _counts_interface(addresses.get(name, [])):
            continue
        total_in += counter.bytes_recv
        total_out += counter.bytes_sent
    return total_in, total_out