"""
In-memory sample store and the JSON report it is exported to.
"""
import json
import logging
from datetime import datetime
from pathlib import Path

from sysmon.collectors import get_system_info

METRICS = ('cpu', 'memory', 'disk', 'network', 'processes')


class Stats:
    """Append-only lists of samples grouped by metric type"""

    def __init__(self):
        self.samples = {metric: [] for metric in METRICS}

    def add(self, metric, sample):
        self.samples[metric].append(sample)

    def extend(self, metric, samples):
        self.samples[metric].extend(samples)

    def count(self):
        return sum(len(samples) for samples in self.samples.values())

    def clear(self):
        for samples in self.samples.values():
            samples.clear()

    def to_dict(self):
        return {metric: list(samples) for metric, samples in self.samples.items()}


def build_report(stats, system=None, captured_at=None):
    captured_at = captured_at or datetime.now()
    return {
        'timestamp': captured_at.isoformat(),
        'system': system if system is not None else get_system_info(),
        'stats': stats.to_dict(),
    }


def report_filename(captured_at):
    stamp = captured_at.isoformat().replace(':', '-').replace('.', '-')
    return f"system_report_{stamp}.json"


def export_report(stats, output_dir='.', system=None):
    """Write the accumulated samples to a timestamped JSON file.

    Returns the written path, or None when the report could not be saved.
    """
    captured_at = datetime.now()
    report = build_report(stats, system=system, captured_at=captured_at)
    filepath = Path(output_dir) / report_filename(captured_at)

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logging.error(f"Failed to save report {filepath}: {e}")
        print(f"Error saving report: {e}")
        return None

    logging.info(f"Report with {stats.count()} samples saved to {filepath}")
    print(f"Report saved to file: {filepath}")
    return filepath
