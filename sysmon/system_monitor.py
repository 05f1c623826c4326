#!/usr/bin/env python3
"""
System Monitor - Interactive local resource monitoring
Samples CPU, memory, disk, network interfaces and top processes,
and exports the collected samples as a JSON report
"""

import argparse
import logging
import sys
import time

from sysmon import config
from sysmon.collectors import (CpuSampler, cpu_model, cpu_sample, format_gb,
                               format_uptime, get_network_interfaces, get_size,
                               get_system_info, memory_sample, read_memory)
from sysmon.commands import disk_command, process_command, run_command
from sysmon.log_setup import setup_logging
from sysmon.parsers import parse_df, parse_ps, parse_tasklist, parse_wmic_disks
from sysmon.report import Stats, export_report

MENU = [
    ('1', 'System information'),
    ('2', 'CPU monitoring'),
    ('3', 'Memory monitoring'),
    ('4', 'Disk monitoring'),
    ('5', 'Network monitoring'),
    ('6', 'Process monitoring'),
    ('7', 'Full monitoring'),
    ('8', 'Export report'),
    ('9', 'Exit'),
]


class SystemMonitor:
    def __init__(self, platform=None, interval=None, full_interval=None,
                 output_dir=None, process_limit=None, reset_after_export=False):
        self.platform = platform or sys.platform
        self.interval = interval if interval is not None else config.INTERVAL
        self.full_interval = full_interval if full_interval is not None else config.FULL_INTERVAL
        self.output_dir = output_dir or config.OUTPUT_DIR
        self.process_limit = process_limit or config.PROCESS_LIMIT
        self.reset_after_export = reset_after_export
        self.stats = Stats()
        self.cpu_sampler = None

    # --------------------------
    # Menu loop
    # --------------------------

    def show_banner(self):
        print("=" * 50)
        print("System Monitor".center(50))
        print("=" * 50)

    def show_menu(self):
        print("\nChoose an action:")
        for key, label in MENU:
            print(f"{key}. {label}")

    def handle_choice(self, choice):
        """Run a menu entry. Returns False when the user asked to exit."""
        actions = {
            '1': self.show_system_info,
            '2': self.monitor_cpu,
            '3': self.monitor_memory,
            '4': self.monitor_disk,
            '5': self.monitor_network,
            '6': self.monitor_processes,
            '7': self.full_monitoring,
            '8': self.export,
        }
        choice = choice.strip()
        if choice == '9':
            return False
        action = actions.get(choice)
        if action is None:
            print("Invalid choice!")
            return True
        action()
        if choice in ('1', '4', '5', '6'):
            self.pause()
        return True

    def pause(self):
        try:
            input("\nPress Enter to return to the menu...")
        except EOFError:
            pass

    def run(self):
        self.show_banner()
        try:
            while True:
                self.show_menu()
                try:
                    choice = input("\nEnter a number: ")
                except EOFError:
                    break
                if not self.handle_choice(choice):
                    break
        except KeyboardInterrupt:
            print()
        self.exit()

    def exit(self):
        logging.info("System monitor exiting")
        print("\nThanks for using System Monitor!")

    # --------------------------
    # Screens
    # --------------------------

    def show_system_info(self):
        print("\n=== System Information ===\n")
        info = get_system_info()
        print(f"OS: {info['platform']} {info['arch']}")
        print(f"Host: {info['hostname']}")
        print(f"Uptime: {format_uptime(info['uptime'])}")
        print(f"Memory: {get_size(info['freeMemory'])} free / {get_size(info['totalMemory'])}")
        print(f"Processors: {info['cpus']} cores")
        print(f"CPU model: {cpu_model()}")

        print("\n=== Network Interfaces ===")
        for interface in get_network_interfaces():
            print(f"{interface['name']}: {interface['ip']}")
        return info

    def poll(self, sample, interval, duration=None):
        """Call sample() every `interval` seconds until Ctrl+C or `duration` elapses"""
        print("Press Ctrl+C to stop\n")
        start_time = time.time()
        try:
            while True:
                sample()
                if duration is not None and (time.time() - start_time) >= duration:
                    break
                time.sleep(interval)
        except KeyboardInterrupt:
            print("\nMonitoring stopped.")

    def sample_cpu(self):
        if self.cpu_sampler is None:
            self.cpu_sampler = CpuSampler()
            # first reading needs a window to measure over
            time.sleep(min(self.interval, 1))
        sample = cpu_sample(self.cpu_sampler)
        self.stats.add('cpu', sample)
        return sample

    def sample_memory(self, memory=None):
        sample = memory_sample(memory)
        self.stats.add('memory', sample)
        return sample

    def monitor_cpu(self, duration=None):
        print("\n=== CPU Monitoring ===\n")

        def tick():
            sample = self.sample_cpu()
            print(f"[{sample['timestamp']}] CPU Usage: {sample['usage']}%")

        self.poll(tick, self.interval, duration)

    def monitor_memory(self, duration=None):
        print("\n=== Memory Monitoring ===\n")

        def tick():
            sample = self.sample_memory()
            print(f"[{sample['timestamp']}] Memory: {sample['used']} GB / "
                  f"{sample['total']} GB ({sample['usage']}%)")

        self.poll(tick, self.interval, duration)

    def full_monitoring(self, duration=None):
        print("\n=== Full System Monitoring ===\n")

        def tick():
            cpu = self.sample_cpu()
            reading = read_memory()
            memory = self.sample_memory(reading)
            print(f"[{cpu['timestamp']}] CPU: {cpu['usage']}% | RAM: {memory['usage']}% | "
                  f"Free: {format_gb(reading.available)} GB")

        self.poll(tick, self.full_interval, duration)

    def monitor_disk(self):
        print("\n=== Disk Monitoring ===\n")
        result = run_command(disk_command(self.platform), timeout=config.COMMAND_TIMEOUT)
        if result['status'] != 'success':
            print(f"Error getting disk information: {result['error']}")
            return []

        if self.platform == 'win32':
            rows = parse_wmic_disks(result['output'])
            print("Drive | Free | Total | Used")
            print("-" * 50)
            for row in rows:
                print(f"{row['drive']} | {row['free']} GB | {row['total']} GB | {row['usage']}%")
        else:
            rows = parse_df(result['output'])
            print("Filesystem | Size | Used | Available | Use% | Mounted on")
            print("-" * 80)
            for row in rows:
                print(f"{row['filesystem']} | {row['size']} | {row['used']} | "
                      f"{row['available']} | {row['usage']} | {row['mounted_on']}")

        self.stats.extend('disk', rows)
        return rows

    def monitor_network(self):
        print("\n=== Network Monitoring ===\n")
        interfaces = get_network_interfaces()
        print("Active interfaces:\n")
        if not interfaces:
            print("  No external IPv4 interfaces found")
        for interface in interfaces:
            print(f"{interface['name']}:")
            print(f"  IP: {interface['ip']}")
            print(f"  Netmask: {interface['netmask']}")
            print(f"  MAC: {interface['mac']}")
            print()

        self.stats.extend('network', interfaces)
        return interfaces

    def monitor_processes(self):
        print("\n=== Process Monitoring ===\n")
        result = run_command(process_command(self.platform), timeout=config.COMMAND_TIMEOUT)
        if result['status'] != 'success':
            print(f"Error getting process list: {result['error']}")
            return []

        if self.platform == 'win32':
            rows = parse_tasklist(result['output'], self.process_limit)
            print("Process | PID | Memory | Session")
            print("-" * 60)
            for row in rows:
                print(f"{row['name']} | {row['pid']} | {row['memory']} | {row['session']}")
        else:
            rows = parse_ps(result['output'], self.process_limit)
            print("User | PID | CPU% | MEM% | Command")
            print("-" * 80)
            for row in rows:
                command = row['command']
                if len(command) > 50:
                    command = command[:50] + '...'
                print(f"{row['user']} | {row['pid']} | {row['cpu']}% | {row['mem']}% | {command}")

        self.stats.extend('processes', rows)
        return rows

    def export(self):
        path = export_report(self.stats, self.output_dir)
        if path is not None and self.reset_after_export:
            self.stats.clear()
        return path


def positive_float(value):
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"{value} must be greater than 0")
    return number


def main(argv=None):
    parser = argparse.ArgumentParser(description='Monitor local system resources')
    parser.add_argument('-i', '--interval', type=positive_float,
                        help=f'Sampling interval in seconds (default: {config.INTERVAL})')
    parser.add_argument('-d', '--duration', type=positive_float,
                        help='Duration of live monitoring in seconds (default: until Ctrl+C)')
    parser.add_argument('-o', '--output-dir', type=str,
                        help='Directory for exported reports (default: SYSMON_OUTPUT_DIR or .)')
    parser.add_argument('--log-file', type=str, help='Log file path')
    parser.add_argument('--env-file', type=str, default='',
                        help='Path to .env file to load before running')

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--info', action='store_true', help='Show system information and exit')
    mode.add_argument('--cpu', action='store_true', help='Monitor CPU usage')
    mode.add_argument('--memory', action='store_true', help='Monitor memory usage')
    mode.add_argument('--disk', action='store_true', help='Show disk usage')
    mode.add_argument('--network', action='store_true', help='Show network interfaces')
    mode.add_argument('--processes', action='store_true', help='Show top processes')
    mode.add_argument('--full', action='store_true', help='Monitor CPU and memory together')

    parser.add_argument('--export', action='store_true',
                        help='Export a JSON report after a non-interactive run')
    parser.add_argument('--reset-after-export', action='store_true',
                        help='Drop collected samples after each successful export')

    args = parser.parse_args(argv)

    if args.env_file:
        config.load_env_file(args.env_file)
    setup_logging(args.log_file or config.LOG_FILE)
    logging.info('Starting system monitor')

    monitor = SystemMonitor(interval=args.interval, output_dir=args.output_dir,
                            reset_after_export=args.reset_after_export)
    if args.interval is not None:
        monitor.full_interval = args.interval

    if args.info:
        monitor.show_system_info()
    elif args.cpu:
        monitor.monitor_cpu(args.duration)
    elif args.memory:
        monitor.monitor_memory(args.duration)
    elif args.disk:
        monitor.monitor_disk()
    elif args.network:
        monitor.monitor_network()
    elif args.processes:
        monitor.monitor_processes()
    elif args.full:
        monitor.full_monitoring(args.duration)
    else:
        monitor.run()
        return 0

    if args.export:
        monitor.export()
    return 0


if __name__ == "__main__":
    sys.exit(main())
