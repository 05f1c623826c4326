"""
Parsers for the tabular text printed by df, wmic, ps and tasklist.

Each parser returns a list of row dicts. Lines that do not have the expected
shape (too few fields, non-numeric sizes) are skipped, never raised on.
"""
import csv
import logging

from sysmon.collectors import format_gb, format_percent


def _data_lines(output, skip_header=True):
    lines = [line for line in output.strip().splitlines() if line.strip()]
    return lines[1:] if skip_header else lines


def parse_df(output):
    """Parse `df -hP` output into filesystem rows"""
    rows = []
    for line in _data_lines(output):
        parts = line.split()
        if len(parts) < 6:
            logging.debug(f"Skipping malformed df line: {line!r}")
            continue
        rows.append({
            'filesystem': parts[0],
            'size': parts[1],
            'used': parts[2],
            'available': parts[3],
            'usage': parts[4],
            'mounted_on': ' '.join(parts[5:]),
        })
    return rows


def parse_wmic_disks(output):
    """Parse `wmic logicaldisk get size,freespace,caption` output.

    wmic orders the columns alphabetically: Caption, FreeSpace, Size.
    """
    rows = []
    for line in _data_lines(output):
        parts = line.split()
        if len(parts) < 3:
            # drives with no media report only a caption
            logging.debug(f"Skipping malformed wmic line: {line!r}")
            continue
        try:
            free_space = int(parts[1])
            total_size = int(parts[2])
        except ValueError:
            logging.debug(f"Skipping non-numeric wmic line: {line!r}")
            continue
        if total_size <= 0:
            continue

        used_space = total_size - free_space
        rows.append({
            'drive': parts[0],
            'free': format_gb(free_space),
            'total': format_gb(total_size),
            'usage': format_percent(used_space / total_size * 100),
        })
    return rows


def parse_ps(output, limit=20):
    """Parse `ps aux` output, keeping at most `limit` processes"""
    rows = []
    for line in _data_lines(output):
        if len(rows) >= limit:
            break
        parts = line.split()
        # USER PID %CPU %MEM VSZ RSS TT STAT STARTED TIME COMMAND...
        if len(parts) < 11:
            logging.debug(f"Skipping malformed ps line: {line!r}")
            continue
        rows.append({
            'user': parts[0],
            'pid': parts[1],
            'cpu': parts[2],
            'mem': parts[3],
            'command': ' '.join(parts[10:]),
        })
    return rows


def parse_tasklist(output, limit=20):
    """Parse `tasklist /FO CSV /NH` output, keeping at most `limit` processes"""
    rows = []
    for fields in csv.reader(_data_lines(output, skip_header=False)):
        if len(rows) >= limit:
            break
        # "Image Name","PID","Session Name","Session#","Mem Usage"
        if len(fields) < 5:
            logging.debug(f"Skipping malformed tasklist row: {fields!r}")
            continue
        rows.append({
            'name': fields[0].strip(),
            'pid': fields[1].strip(),
            'session': fields[2].strip(),
            'memory': fields[4].strip(),
        })
    return rows
