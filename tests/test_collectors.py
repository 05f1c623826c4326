import socket
from collections import namedtuple
from types import SimpleNamespace

import pytest

from sysmon import collectors
from sysmon.collectors import GB

CpuTimes = namedtuple('CpuTimes', ['user', 'system', 'idle'])


@pytest.mark.parametrize('idle, total, expected', [
    (25, 100, 75.0),
    (100, 100, 0.0),
    (0, 100, 100.0),
    (50, 200, 75.0),
])
def test_cpu_usage_formula(idle, total, expected):
    assert collectors.cpu_usage(idle, total) == pytest.approx(expected)


def test_cpu_usage_is_clamped():
    assert collectors.cpu_usage(150, 100) == 0.0
    assert collectors.cpu_usage(-10, 100) == 100.0


def test_cpu_usage_without_ticks():
    assert collectors.cpu_usage(0, 0) == 0.0


def test_cpu_ticks_counts_iowait_as_idle():
    LinuxTimes = namedtuple('LinuxTimes', ['user', 'system', 'idle', 'iowait'])
    idle, total = collectors.cpu_ticks(LinuxTimes(10, 5, 80, 5))
    assert idle == 85
    assert total == 100


def test_cpu_sampler_averages_per_core_deltas(monkeypatch):
    snapshots = iter([
        [CpuTimes(10, 10, 80), CpuTimes(20, 0, 80)],
        [CpuTimes(20, 20, 100), CpuTimes(40, 0, 100)],
        [CpuTimes(20, 20, 200), CpuTimes(40, 0, 200)],
    ])
    monkeypatch.setattr(collectors.psutil, 'cpu_times', lambda percpu=False: next(snapshots))

    sampler = collectors.CpuSampler()
    # core 0: 20 idle of 40, core 1: 20 idle of 40
    assert sampler.sample() == pytest.approx(50.0)
    # fully idle window
    assert sampler.sample() == pytest.approx(0.0)


def test_cpu_sample_shape(monkeypatch):
    sampler = SimpleNamespace(sample=lambda: 12.345)
    sample = collectors.cpu_sample(sampler)
    assert sample['usage'] == '12.35'
    assert len(sample['timestamp'].split(':')) == 3


def test_memory_usage():
    assert collectors.memory_usage(8 * GB, 2 * GB) == pytest.approx(75.0)
    assert collectors.memory_usage(0, 0) == 0.0


def test_memory_sample_matches_gb_conversion(monkeypatch):
    total = 16 * GB
    free = 5 * GB + 512 * 1024 ** 2
    monkeypatch.setattr(collectors.psutil, 'virtual_memory',
                        lambda: SimpleNamespace(total=total, available=free))

    sample = collectors.memory_sample()

    assert sample['total'] == '16.00'
    assert sample['used'] == '10.50'
    assert float(sample['usage']) == pytest.approx((total - free) / total * 100, abs=0.01)
    assert float(sample['used']) / float(sample['total']) * 100 == pytest.approx(
        float(sample['usage']), abs=0.01)


@pytest.mark.parametrize('seconds, expected', [
    (59, '0m'),
    (3600 * 5 + 120, '5h 2m'),
    (86400 + 3600 + 60, '1d 1h 1m'),
    (2 * 86400 + 300, '2d 5m'),
])
def test_format_uptime(seconds, expected):
    assert collectors.format_uptime(seconds) == expected


def test_get_size():
    assert collectors.get_size(512) == '512.00B'
    assert collectors.get_size(1536) == '1.50KB'
    assert collectors.get_size(3 * GB) == '3.00GB'


def test_get_network_interfaces_skips_loopback_and_ipv6(monkeypatch):
    def addr(family, address, netmask=None):
        return SimpleNamespace(family=family, address=address, netmask=netmask)

    addrs = {
        'lo': [addr(socket.AF_INET, '127.0.0.1', '255.0.0.0')],
        'eth0': [
            addr(collectors.psutil.AF_LINK, 'aa:bb:cc:dd:ee:ff'),
            addr(socket.AF_INET, '192.168.1.5', '255.255.255.0'),
            addr(socket.AF_INET6, 'fe80::1'),
        ],
        'tun0': [addr(socket.AF_INET, '10.8.0.2', None)],
    }
    monkeypatch.setattr(collectors.psutil, 'net_if_addrs', lambda: addrs)

    interfaces = collectors.get_network_interfaces()

    assert interfaces == [
        {'name': 'eth0', 'ip': '192.168.1.5', 'netmask': '255.255.255.0',
         'mac': 'aa:bb:cc:dd:ee:ff'},
        {'name': 'tun0', 'ip': '10.8.0.2', 'netmask': '', 'mac': collectors.NO_MAC},
    ]


def test_system_info_has_fixed_shape():
    info = collectors.get_system_info()
    assert set(info) == {'platform', 'arch', 'hostname', 'uptime',
                         'totalMemory', 'freeMemory', 'cpus'}
    assert info['totalMemory'] >= info['freeMemory']
    assert info['cpus'] >= 1


def test_cpu_ticks_does_not_count_guest_twice():
    GuestTimes = namedtuple('GuestTimes', ['user', 'nice', 'idle', 'guest', 'guest_nice'])
    idle, total = collectors.cpu_ticks(GuestTimes(30, 10, 60, 20, 5))
    assert idle == 60
    assert total == 100
