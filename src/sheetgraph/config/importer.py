"""Workbook import defaults."""

from __future__ import annotations

from dataclasses import dataclass

CONTROL_SHEET_NAME = "MAC"
ROLE_SHEET_NAME = "Role"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    control_sheet: str = CONTROL_SHEET_NAME
    role_sheet: str = ROLE_SHEET_NAME


def get_import_config() -> ImportConfig:
    return ImportConfig()
