"""
Collectors for OS-level counters: system descriptor, CPU, memory and
network interfaces. Everything here reads psutil directly; the helpers at
the top are pure so the formulas can be checked without a live system.
"""
import platform
import socket
import sys
import time
from datetime import datetime

import psutil

GB = 1024 ** 3
NO_MAC = '00:00:00:00:00:00'


def get_size(bytes, suffix="B"):
    """Convert bytes to human readable format"""
    factor = 1024
    for unit in ["", "K", "M", "G", "T", "P"]:
        if bytes < factor:
            return f"{bytes:.2f}{unit}{suffix}"
        bytes /= factor
    return f"{bytes:.2f}E{suffix}"


def format_gb(value):
    return f"{value / GB:.2f}"


def format_percent(value):
    return f"{value:.2f}"


def format_uptime(seconds):
    """Render uptime as '2d 3h 15m'; zero days / hours are left out"""
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60

    result = ''
    if days > 0:
        result += f'{days}d '
    if hours > 0:
        result += f'{hours}h '
    result += f'{minutes}m'
    return result


def timestamp():
    return datetime.now().strftime('%H:%M:%S')


def cpu_usage(idle, total):
    """Busy percentage for the given idle / total ticks, clamped to [0, 100]"""
    if total <= 0:
        return 0.0
    usage = 100 - (100 * idle / total)
    return max(0.0, min(100.0, usage))


def memory_usage(total, free):
    if total <= 0:
        return 0.0
    return (total - free) / total * 100


def cpu_ticks(times):
    """Split a psutil cpu_times entry into (idle, total) ticks"""
    idle = times.idle + getattr(times, 'iowait', 0.0)
    # Linux already counts guest time inside user / nice
    total = sum(times) - getattr(times, 'guest', 0.0) - getattr(times, 'guest_nice', 0.0)
    return idle, total


class CpuSampler:
    """Instantaneous CPU utilization from per-core tick deltas.

    Every sample() compares the current per-core counters to the ones seen on
    the previous call (or at construction for the first call).
    """

    def __init__(self):
        self._previous = psutil.cpu_times(percpu=True)

    def sample(self):
        current = psutil.cpu_times(percpu=True)
        idle_delta = 0.0
        total_delta = 0.0
        for before, after in zip(self._previous, current):
            idle_before, total_before = cpu_ticks(before)
            idle_after, total_after = cpu_ticks(after)
            idle_delta += idle_after - idle_before
            total_delta += total_after - total_before
        self._previous = current

        cores = len(current) or 1
        return cpu_usage(idle_delta / cores, total_delta / cores)


def cpu_sample(sampler):
    return {
        'timestamp': timestamp(),
        'usage': format_percent(sampler.sample()),
    }


def read_memory():
    return psutil.virtual_memory()


def memory_sample(memory=None):
    """Memory sample from a virtual_memory() reading, taking a fresh one if none is given"""
    if memory is None:
        memory = read_memory()
    total = memory.total
    free = memory.available
    return {
        'timestamp': timestamp(),
        'used': format_gb(total - free),
        'total': format_gb(total),
        'usage': format_percent(memory_usage(total, free)),
    }


def cpu_model():
    if sys.platform.startswith('linux'):
        try:
            with open('/proc/cpuinfo', 'r', encoding='utf-8', errors='ignore') as f:
                for line in f:
                    if line.lower().startswith('model name'):
                        return line.split(':', 1)[1].strip()
        except OSError:
            pass
    return platform.processor() or 'unknown'


def get_system_info():
    """Static descriptor of the host, in the shape written to reports"""
    memory = psutil.virtual_memory()
    return {
        'platform': sys.platform,
        'arch': platform.machine(),
        'hostname': socket.gethostname(),
        'uptime': round(time.time() - psutil.boot_time(), 2),
        'totalMemory': memory.total,
        'freeMemory': memory.available,
        'cpus': psutil.cpu_count() or 0,
    }


def get_network_interfaces():
    """External IPv4 interfaces with netmask and MAC address"""
    interfaces = []
    for name, addresses in psutil.net_if_addrs().items():
        mac = next((a.address for a in addresses if a.family == psutil.AF_LINK), NO_MAC)
        for address in addresses:
            if address.family != socket.AF_INET:
                continue
            if address.address.startswith('127.'):
                continue
            interfaces.append({
                'name': name,
                'ip': address.address,
                'netmask': address.netmask or '',
                'mac': mac,
            })
    return interfaces
