"""Host CPU, memory and swap statistics read from the Linux /proc filesystem."""

from __future__ import annotations

import math
import time
from collections.abc import Iterator
from dataclasses import dataclass

PROC_CPUINFO = "/proc/cpuinfo"
PROC_STAT = "/proc/stat"
PROC_MEMINFO = "/proc/meminfo"

_U64_MAX = 2**64 - 1


def _parse_u64(text: str) -> int:
    """Parse an unsigned 64-bit integer, yielding 0 for anything unparsable."""
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return 0
    value = int(digits)
    return value if value <= _U64_MAX else 0


def _read_lines(path: str) -> Iterator[str] | None:
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError:
        return None

    def lines() -> Iterator[str]:
        with handle:
            for line in handle:
                yield line.rstrip("\r\n")

    return lines()


def cpu_count(path: str = PROC_CPUINFO) -> int:
    """Count the processors listed in cpuinfo; 1 if the file cannot be read."""
    lines = _read_lines(path)
    if lines is None:
        return 1
    return sum(1 for line in lines if line.startswith("processor"))


def cpu_times(path: str = PROC_STAT) -> tuple[int, int]:
    """Return (total, idle) jiffies from the aggregate ``cpu`` line of /proc/stat."""
    lines = _read_lines(path)
    if lines is None:
        return (0, 0)
    for line in lines:
        if not line.startswith("cpu "):
            continue
        parts = line.split()
        if len(parts) < 5:
            continue
        # user nice system idle iowait irq softirq steal
        fields = [_parse_u64(part) for part in parts[1:9]]
        fields.extend([0] * (8 - len(fields)))
        idle = fields[3] + fields[4]
        return (sum(fields), idle)
    return (0, 0)


def cpu_usage(path: str = PROC_STAT, interval: float = 0.1) -> int:
    """Sample CPU load over ``interval`` seconds; 1000 means one core fully busy."""
    total1, idle1 = cpu_times(path)
    time.sleep(interval)
    total2, idle2 = cpu_times(path)
    total_delta = max(total2 - total1, 0)
    idle_delta = max(idle2 - idle1, 0)
    if total_delta == 0:
        return 0
    ratio = (total_delta - idle_delta) / total_delta
    return max(0, math.floor(ratio * 1000.0 + 0.5))


def _meminfo_fields(path: str, keys: tuple[str, ...]) -> dict[str, int]:
    values = dict.fromkeys(keys, 0)
    lines = _read_lines(path)
    if lines is None:
        return values
    for line in lines:
        for key in keys:
            if line.startswith(key + ":"):
                parts = line.split()
                if len(parts) > 1:
                    values[key] = _parse_u64(parts[1])
                break
    return values


@dataclass(frozen=True)
class MemInfo:
    """Physical memory totals in kilobytes and the used fraction (0.0 to 1.0)."""

    total_kb: int
    used_kb: int
    usage_ratio: float


@dataclass(frozen=True)
class SwapInfo:
    """Swap space totals in kilobytes and the used fraction (0.0 to 1.0)."""

    total_kb: int
    used_kb: int
    usage_ratio: float


def _ratio(used: int, total: int) -> float:
    return used / total if total > 0 else 0.0


def get_mem_info(path: str = PROC_MEMINFO) -> MemInfo:
    """Read physical memory size and usage, preferring MemAvailable over MemFree."""
    fields = _meminfo_fields(path, ("MemTotal", "MemFree", "MemAvailable"))
    total = fields["MemTotal"]
    free = fields["MemFree"]
    available = fields["MemAvailable"]
    if 0 < available < total:
        used = total - available
    elif free < total:
        used = total - free
    else:
        used = 0
    return MemInfo(total_kb=total, used_kb=used, usage_ratio=_ratio(used, total))


def get_swap_info(path: str = PROC_MEMINFO) -> SwapInfo:
    """Read swap size and usage."""
    fields = _meminfo_fields(path, ("SwapTotal", "SwapFree"))
    total = fields["SwapTotal"]
    free = fields["SwapFree"]
    used = total - free if free < total else 0
    return SwapInfo(total_kb=total, used_kb=used, usage_ratio=_ratio(used, total))