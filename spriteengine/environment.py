"""Host environment report: CPU, memory, OS, GPUs, drives and SMART write totals."""

from __future__ import annotations

import argparse
import glob
import os
import platform
import re
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

import psutil

DEFAULT_DRIVE_PATH = "/dev/sdb"
_TERABYTE = 1024.0 ** 4
_BYTES_PER_UNIT = 512.0
_NVME_UNIT_MULTIPLIER = 1000.0
_INACCESSIBLE_MARKERS = ("Unable to detect device type", "Permission denied")
_LEADING_INTEGER = re.compile(r"\s*\+?(\d+)")

Reading = tuple[str, float]


@dataclass(frozen=True)
class DriveInfo:
    letter: str
    type: str
    media_type: str = "Unknown"


@dataclass(frozen=True)
class SmartDevice:
    path: str
    device_type: str = ""


def _run(args: Sequence[str]) -> Optional[str]:
    """Run a command with stderr merged into stdout; None if it cannot start."""
    try:
        result = subprocess.run(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError:
        return None
    return result.stdout or ""


def parse_smartctl_scan(output: str) -> list[SmartDevice]:
    """Extract device paths and their ``-d`` types from ``smartctl --scan`` output."""
    devices = []
    for raw in output.splitlines():
        line = raw.rstrip("\r\n")
        start = line.find("/dev/")
        if start == -1:
            continue
        path = line[start:].split(" ", 1)[0]
        type_pos = line.find("-d ")
        device_type = line[type_pos + 3:].split(" ", 1)[0] if type_pos != -1 else ""
        devices.append(SmartDevice(path, device_type))
    return devices


def summarize_tbw(output: str) -> str:
    """One-line summary of the first write-total line in ``smartctl -a`` output."""
    for raw in output.splitlines():
        line = raw.rstrip("\r\n")
        if "Data Units Written" in line:
            return "TBW (Data Units Written): " + line[line.find(":") + 1:]
        if "Total_LBAs_Written" in line:
            return "TBW (LBAs Written): " + line[line.rfind(" ") + 1:]
    return "TBW: Unavailable"


def _parse_counter(text: str) -> int:
    match = _LEADING_INTEGER.match(text)
    if match is None:
        raise ValueError(f"not an unsigned integer: {text!r}")
    return int(match.group(1))


def estimate_tbw(output: str) -> list[Reading]:
    """Every write-counter line in ``smartctl -a`` output with its estimate in TB.

    Raises ValueError when a counter line does not end in a number.
    """
    readings: list[Reading] = []
    for line in output.splitlines():
        if "Data Units Written" in line:
            pos = line.rfind(" ")
            if pos != -1:
                value = _parse_counter(line[pos + 1:])
                readings.append(
                    (line, value * _BYTES_PER_UNIT * _NVME_UNIT_MULTIPLIER / _TERABYTE)
                )
        if "Total_LBAs_Written" in line or "Host_Writes_32MiB" in line:
            pos = line.rfind(" ")
            if pos != -1:
                value = _parse_counter(line[pos + 1:])
                readings.append((line, value * _BYTES_PER_UNIT / _TERABYTE))
    return readings


def tbw_from_smartctl(device_path: str) -> str:
    """Run ``smartctl -a`` on a device and summarize its write total."""
    output = _run(["smartctl", "-a", device_path])
    if output is None:
        return "TBW: Failed to open smartctl"
    return summarize_tbw(output)


def detect_drive_info() -> dict[str, Optional[list[Reading]]]:
    """Query every device smartctl can find and print its write estimates.

    Returns the readings per device path; None marks an inaccessible device.
    """
    print("\n[Drive Info with TBW]")
    scan = _run(["smartctl", "--scan"])
    devices = parse_smartctl_scan(scan) if scan is not None else []
    report: dict[str, Optional[list[Reading]]] = {}

    for device in devices:
        args = ["smartctl", "-a"]
        if device.device_type:
            args += ["-d", device.device_type]
        args.append(device.path)
        print("Running command: " + " ".join(args))
        output = _run(args) or ""

        if any(marker in output for marker in _INACCESSIBLE_MARKERS):
            print(f"{device.path} ({device.device_type}): Unavailable or inaccessible.")
            report[device.path] = None
            continue

        print(f"{device.path} ({device.device_type}):")
        readings = estimate_tbw(output)
        for line, terabytes in readings:
            print(f"  {line}")
            print(f"  Estimated TBW: {terabytes:g} TB")
        if not readings:
            print("  TBW info not found.")
        report[device.path] = readings
    return report


def _detect_cpu_name() -> str:
    if sys.platform == "win32":
        import winreg

        try:
            with winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE,
                r"HARDWARE\DESCRIPTION\System\CentralProcessor\0",
            ) as key:
                value, _ = winreg.QueryValueEx(key, "ProcessorNameString")
                return str(value)
        except OSError:
            return ""
    try:
        with open("/proc/cpuinfo", encoding="utf-8") as cpuinfo:
            for line in cpuinfo:
                if line.startswith("model name"):
                    return line.split(":", 1)[1].strip()
    except OSError:
        pass
    return platform.processor()


def _detect_gpus() -> list[str]:
    if sys.platform == "win32":
        import winreg

        names = []
        base = r"SYSTEM\CurrentControlSet\Control\Class\{4d36e968-e325-11ce-bfc1-08002be10318}"
        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, base) as root:
                index = 0
                while True:
                    try:
                        sub = winreg.EnumKey(root, index)
                    except OSError:
                        break
                    index += 1
                    try:
                        with winreg.OpenKey(root, sub) as key:
                            value, _ = winreg.QueryValueEx(key, "DriverDesc")
                            names.append(str(value))
                    except OSError:
                        continue
        except OSError:
            pass
        return names

    names = []
    for card in sorted(glob.glob("/sys/class/drm/card[0-9]*")):
        if "-" in os.path.basename(card):
            continue
        driver = ""
        try:
            with open(os.path.join(card, "device", "uevent"), encoding="utf-8") as uevent:
                for line in uevent:
                    if line.startswith("DRIVER="):
                        driver = line.split("=", 1)[1].strip()
        except OSError:
            continue
        names.append(f"{os.path.basename(card)} ({driver})" if driver else os.path.basename(card))
    return names


def _detect_os_version() -> str:
    if sys.platform == "win32":
        version = sys.getwindowsversion()
        return f"Windows {version.major}.{version.minor}"
    system = platform.system()
    if not system:
        return "Unknown Version"
    return f"{system} {platform.release()}".strip()


def _read_rotational(path: str) -> Optional[str]:
    try:
        with open(path, encoding="utf-8") as flag:
            value = flag.read().strip()
    except OSError:
        return None
    if value == "1":
        return "HDD"
    if value == "0":
        return "SSD"
    return None


def _media_type(device: str) -> str:
    if not sys.platform.startswith("linux") or not device.startswith("/dev/"):
        return "Unknown"
    name = os.path.basename(os.path.realpath(device))
    block = os.path.join("/sys/class/block", name)
    candidates = (
        os.path.join(block, "queue", "rotational"),
        os.path.join(os.path.dirname(os.path.realpath(block)), "queue", "rotational"),
    )
    for candidate in candidates:
        media = _read_rotational(candidate)
        if media is not None:
            return media
    return "Unknown"


def _drive_type(opts: str, device: str) -> str:
    flags = set(opts.split(","))
    if "cdrom" in flags:
        return "CD-ROM"
    if "removable" in flags:
        return "Removable"
    if "fixed" in flags:
        return "Fixed"
    if sys.platform != "win32" and device.startswith("/dev/"):
        return "Fixed"
    return "Other"


def _detect_drives() -> list[DriveInfo]:
    drives = []
    for part in psutil.disk_partitions(all=False):
        if sys.platform == "win32":
            letter = part.mountpoint.rstrip(":\\/") or part.mountpoint
        else:
            letter = part.mountpoint
        drives.append(
            DriveInfo(letter, _drive_type(part.opts, part.device), _media_type(part.device))
        )
    return sorted(drives, key=lambda drive: drive.letter)


@dataclass
class Environment:
    """A snapshot of the machine the engine runs on."""

    is_64bit: bool = False
    core_count: int = 0
    total_ram_mb: int = 0
    cpu_name: str = ""
    os_version: str = ""
    gpu_names: list[str] = field(default_factory=list)
    drives: list[DriveInfo] = field(default_factory=list)
    drive_path: str = DEFAULT_DRIVE_PATH

    @classmethod
    def detect(cls) -> "Environment":
        """Inspect the running machine."""
        return cls(
            is_64bit=platform.machine().lower() in ("amd64", "x86_64"),
            core_count=os.cpu_count() or 0,
            total_ram_mb=psutil.virtual_memory().total // (1024 * 1024),
            cpu_name=_detect_cpu_name(),
            os_version=_detect_os_version(),
            gpu_names=_detect_gpus(),
            drives=_detect_drives(),
        )

    def format(self) -> str:
        """The human-readable report, one fact per line."""
        lines = [
            f"System Architecture: {'64-bit' if self.is_64bit else '32-bit'}",
            f"CPU: {self.cpu_name}",
            "GPU(s):" + ("" if self.gpu_names else " None Detected"),
        ]
        lines += [f"  - {name}" for name in self.gpu_names]
        lines += [
            f"Logical Cores: {self.core_count}",
            f"RAM: {self.total_ram_mb} MB",
            f"OS: {self.os_version}",
            "Drives:",
        ]
        lines += [
            f"  - {drive.letter}: [{drive.type}] ({drive.media_type})"
            for drive in self.drives
        ]
        return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the environment report and drive write totals."""
    parser = argparse.ArgumentParser(description="Report the host environment.")
    parser.add_argument(
        "--drive",
        default=DEFAULT_DRIVE_PATH,
        help="device whose write total is checked (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    env = Environment.detect()
    env.drive_path = args.drive
    detect_drive_info()
    print(env.format())
    print(f"Checking {env.drive_path}...")
    print(tbw_from_smartctl(env.drive_path))
    return 0