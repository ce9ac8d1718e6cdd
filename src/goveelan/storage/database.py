from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from goveelan.models import Device, ScanResult

SCANS_DIR = "scans"
CURRENT_SCAN_FILE = "current.json"


class Database:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._scans_dir = data_dir / SCANS_DIR
        self._current_scan_path = self._scans_dir / CURRENT_SCAN_FILE

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def current_scan_path(self) -> Path:
        return self._current_scan_path

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._scans_dir.mkdir(parents=True, exist_ok=True)

    def save_scan(self, devices: list[Device]) -> ScanResult:
        scan = ScanResult(
            scan_timestamp=datetime.now(timezone.utc),
            devices=devices,
        )

        self.ensure_dirs()
        with self._current_scan_path.open("w") as handle:
            json.dump(scan.model_dump(mode="json", by_alias=True), handle, indent=2)
        return scan

    def load_current_scan(self) -> ScanResult | None:
        if not self._current_scan_path.exists():
            return None

        try:
            with self._current_scan_path.open("r") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(
                f"Invalid JSON in scan file: {self._current_scan_path}\n{exc}"
            ) from exc

        try:
            return ScanResult.model_validate(data)
        except ValidationError as exc:
            raise ValueError(
                f"Invalid scan file: {self._current_scan_path}\n{exc}"
            ) from exc

    def init(self) -> None:
        self.ensure_dirs()
