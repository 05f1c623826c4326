"""
Thin wrapper around the platform utilities the monitor shells out to.
"""
import logging
import subprocess


def run_command(cmd, timeout=30):
    """Run an external command and return a status dict instead of raising"""
    name = cmd[0]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True,
                                timeout=timeout, errors='replace')
        if result.returncode == 0:
            return {
                'status': 'success',
                'output': result.stdout
            }

        error = result.stderr.strip() or f'{name} exited with code {result.returncode}'
        logging.warning(f"{' '.join(cmd)} failed: {error}")
        return {
            'status': 'failed',
            'error': error,
            'output': result.stdout
        }

    except subprocess.TimeoutExpired:
        logging.warning(f"{' '.join(cmd)} timed out after {timeout}s")
        return {
            'status': 'timeout',
            'error': f'{name} timeout after {timeout} seconds'
        }
    except OSError as e:
        logging.warning(f"Cannot run {name}: {e}")
        return {
            'status': 'error',
            'error': str(e)
        }


def disk_command(platform):
    if platform == 'win32':
        return ['wmic', 'logicaldisk', 'get', 'size,freespace,caption']
    # -P keeps long device names on one line
    return ['df', '-hP']


def process_command(platform):
    if platform == 'win32':
        return ['tasklist', '/FO', 'CSV', '/NH']
    if platform == 'darwin':
        # BSD ps has no --sort; -m sorts by memory
        return ['ps', 'aux', '-m']
    return ['ps', 'aux', '--sort=-%mem']
