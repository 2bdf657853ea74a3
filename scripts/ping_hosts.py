"""Ping several hosts and print ``host rtt`` pairs for ``termplot -k``.

    python scripts/ping_hosts.py example.org example.net | termplot -k -u ms
"""

from __future__ import annotations

import argparse
import re
import selectors
import subprocess
import sys
from typing import Dict, List

_RTT = re.compile(r"time=([0-9.]+) ?ms")


def stop_processes(procs: List[subprocess.Popen], timeout: float = 2.0) -> None:
    """Terminate the ping children and reap them, killing any that hang."""
    for proc in procs:
        if proc.poll() is None:
            proc.terminate()
    for proc in procs:
        try:
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()


def main() -> None:
    parser = argparse.ArgumentParser(description="Emit ping round trip times as key/value lines.")
    parser.add_argument("hosts", nargs="+", help="Hosts to ping.")
    parser.add_argument("--wait", type=float, default=1.1, help="Seconds to wait for the first reply of a round.")
    args = parser.parse_args()

    procs: Dict[str, subprocess.Popen] = {}
    started: List[subprocess.Popen] = []
    sel = selectors.DefaultSelector()
    for host in args.hosts:
        proc = subprocess.Popen(["ping", host], stdout=subprocess.PIPE, text=True, bufsize=1)
        procs[host] = proc
        started.append(proc)
        sel.register(proc.stdout, selectors.EVENT_READ, host)

    try:
        while procs:
            latest: Dict[str, str] = {}
            timeout = args.wait
            while True:
                events = sel.select(timeout)
                if not events:
                    break
                # after the first reply only drain what is already there
                timeout = 0
                for key, _mask in events:
                    host = key.data
                    line = key.fileobj.readline()
                    if line == "":
                        sel.unregister(key.fileobj)
                        procs.pop(host, None)
                        continue
                    m = _RTT.search(line)
                    if m:
                        latest[host] = m.group(1)
            out: List[str] = [f"{h} {latest[h]}" for h in args.hosts if h in latest]
            if out:
                sys.stdout.write(" ".join(out) + "\n")
                sys.stdout.flush()
    except (BrokenPipeError, KeyboardInterrupt):
        pass
    finally:
        stop_processes(started)


if __name__ == "__main__":
    main()
