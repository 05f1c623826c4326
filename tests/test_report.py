import json
from datetime import datetime

from sysmon.report import METRICS, Stats, build_report, export_report, report_filename

SYSTEM = {
    'platform': 'linux',
    'arch': 'x86_64',
    'hostname': 'box',
    'uptime': 3600.0,
    'totalMemory': 16,
    'freeMemory': 4,
    'cpus': 8,
}


def filled_stats():
    stats = Stats()
    stats.add('cpu', {'timestamp': '10:00:00', 'usage': '12.50'})
    stats.add('cpu', {'timestamp': '10:00:01', 'usage': '15.00'})
    stats.add('memory', {'timestamp': '10:00:00', 'used': '4.00', 'total': '16.00',
                         'usage': '25.00'})
    stats.extend('network', [{'name': 'eth0', 'ip': '10.0.0.2',
                              'netmask': '255.0.0.0', 'mac': 'aa:bb:cc:dd:ee:ff'}])
    return stats


def test_stats_is_append_only_per_metric():
    stats = filled_stats()
    assert stats.count() == 4
    assert [s['usage'] for s in stats.samples['cpu']] == ['12.50', '15.00']
    assert stats.samples['disk'] == []


def test_build_report_shape():
    captured_at = datetime(2024, 1, 2, 3, 4, 5)
    report = build_report(filled_stats(), system=SYSTEM, captured_at=captured_at)
    assert report['timestamp'] == '2024-01-02T03:04:05'
    assert report['system'] == SYSTEM
    assert tuple(report['stats']) == METRICS


def test_report_filename_has_no_colons_or_dots():
    name = report_filename(datetime(2024, 1, 2, 3, 4, 5, 678000))
    assert name == 'system_report_2024-01-02T03-04-05-678000.json'


def test_export_report_writes_valid_json(tmp_path):
    stats = filled_stats()
    path = export_report(stats, tmp_path, system=SYSTEM)

    assert path.parent == tmp_path
    with open(path, encoding='utf-8') as f:
        report = json.load(f)
    assert report['system'] == SYSTEM
    assert report['stats']['cpu'] == stats.samples['cpu']
    assert report['stats']['network'][0]['name'] == 'eth0'
    assert sum(len(samples) for samples in report['stats'].values()) == 4


def test_export_report_uses_live_descriptor(tmp_path):
    path = export_report(Stats(), tmp_path)
    with open(path, encoding='utf-8') as f:
        report = json.load(f)
    assert set(report['system']) == set(SYSTEM)


def test_export_report_failure_is_reported_not_raised(tmp_path, capsys):
    blocker = tmp_path / 'not_a_dir'
    blocker.write_text('x')

    assert export_report(filled_stats(), blocker, system=SYSTEM) is None
    assert 'Error saving report' in capsys.readouterr().out
