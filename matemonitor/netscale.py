"""Scale arithmetic and size labels for the resource graphs."""

from __future__ import annotations

import math

_SI_BYTE_UNITS = ("kB", "MB", "GB", "TB", "PB", "EB")
_SI_BIT_UNITS = ("kbit", "Mbit", "Gbit", "Tbit", "Pbit", "Ebit")
_IEC_BYTE_UNITS = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB")

MIN_NET_MAX = 1024
MIN_BIT_MAX = 10000


def nicenum(x: float, round_: bool) -> float:
    """Return a "nice" number (1, 2 or 5 times a power of ten) close to *x*.

    With *round_* the nearest nice number is chosen, otherwise the smallest
    nice number not below *x*.  *x* must be positive.
    """
    if x <= 0:
        raise ValueError("nicenum needs a positive number")
    expv = math.floor(math.log10(x))
    f = x / 10.0**expv
    if round_:
        if f < 1.5:
            nf = 1.0
        elif f < 3.0:
            nf = 2.0
        elif f < 7.0:
            nf = 5.0
        else:
            nf = 10.0
    else:
        if f <= 1.0:
            nf = 1.0
        elif f <= 2.0:
            nf = 2.0
        elif f <= 5.0:
            nf = 5.0
        else:
            nf = 10.0
    return nf * 10.0**expv


def num_bars(draw_height: float, fontsize: float = 8.0) -> int:
    """Return how many horizontal bands a graph of *draw_height* pixels gets.

    The result always divides 100, so percentages fall on whole numbers.
    """
    rows = int(draw_height / (fontsize + 14))
    if rows <= 1:
        return 1
    if rows <= 3:
        return 2
    if rows == 4:
        return 4
    return 5


def _format(size: int, base: int, units: tuple[str, ...], singular: str, plural: str) -> str:
    if size < 0:
        raise ValueError("size must not be negative")
    if size < base:
        return f"{size} {singular if size == 1 else plural}"
    factor = base
    for index, unit in enumerate(units):
        if size < factor * base or index == len(units) - 1:
            return f"{size / factor:.1f} {unit}"
        factor *= base
    raise AssertionError("unreachable")


def format_size(size: int, bits: bool = False) -> str:
    """Format *size* with decimal (SI) units, as bytes or as bits."""
    if bits:
        return _format(int(size), 1000, _SI_BIT_UNITS, "bit", "bits")
    return _format(int(size), 1000, _SI_BYTE_UNITS, "byte", "bytes")


def format_size_iec(size: int) -> str:
    """Format *size* bytes with binary (IEC) units."""
    return _format(int(size), 1024, _IEC_BYTE_UNITS, "byte", "bytes")


def memory_label(used: int, total: int, percent: float) -> str:
    """Return the text shown next to the memory or swap picker."""
    if total == 0:
        return "not available"
    return f"{format_size_iec(used)} ({100.0 * percent:.1f}%) of {format_size_iec(total)}"


def round_net_max(max_value: int, ticks: int, in_bits: bool = False) -> int:
    """Round the network graph maximum *max_value* (bytes/s) up to a tidy value.

    In bit mode the maximum in bits becomes *ticks* times a nice number.
    Otherwise it gets 10 % head-room and becomes a single significant digit
    times a power of 1024, divisible by *ticks*.  The result is never below
    *max_value*.
    """
    if ticks <= 0:
        raise ValueError("ticks must be positive")
    if max_value < 0:
        raise ValueError("max_value must not be negative")
    bak_max = int(max_value)

    if in_bits:
        bit_max = max(bak_max * 8, MIN_BIT_MAX)
        d = nicenum(bit_max // ticks, False)
        bit_max = int(ticks * d)
        new_max = bit_max // 8
    else:
        new_max = int(1.1 * bak_max)
        new_max = max(new_max, MIN_NET_MAX)

        # new_max = coef10 * 2**(base10 * 10) with coef10 < 2**10
        pow2 = new_max.bit_length() - 1
        shift = (pow2 // 10) * 10
        unit = 1 << shift
        coef10 = -(-new_max // unit)

        # keep a single significant digit
        factor10 = 10 ** (len(str(coef10)) - 1)
        coef10 = -(-coef10 // factor10) * factor10

        if coef10 % ticks:
            coef10 += ticks - coef10 % ticks
        new_max = coef10 << shift

    return max(new_max, bak_max)