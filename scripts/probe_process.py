"""
Diagnostic script for the process prober.
Run this to see what the watcher sees for a given process name.

Expected behavior:
- Lists every process whose name matches exactly, with its psutil status
- Prints the verdict for both match policies ("first" and "any")
- Repeats every second until Ctrl+C
"""

import sys
import os
import time
import logging

import psutil

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from packages.core.watcher.process_prober import is_running_status, process_running

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)

def list_matches(name):
    matches = []
    for p in psutil.process_iter(attrs=["pid", "name", "status"]):
        if p.info.get("name") == name:
            matches.append(p.info)
    return matches

def main():
    if len(sys.argv) < 2:
        print(f"Usage: {sys.argv[0]} PROCESS_NAME")
        return 1

    name = " ".join(sys.argv[1:])
    print("=" * 60)
    print(f"Process Probe: {name!r}")
    print("=" * 60)

    try:
        tick = 0
        while True:
            tick += 1
            matches = list_matches(name)
            if not matches:
                print(f"[{tick:4d}] no process named {name!r}")
            for info in matches:
                mark = "✓" if is_running_status(info.get("status")) else "✗"
                print(f"[{tick:4d}] {mark} pid={info['pid']:<7} status={info.get('status')}")
            print(f"       first={process_running(name, 'first')} any={process_running(name, 'any')}")
            time.sleep(1.0)

    except KeyboardInterrupt:
        print()
        print("-" * 60)
        print("Probe stopped by user")

    return 0

if __name__ == "__main__":
    sys.exit(main())
