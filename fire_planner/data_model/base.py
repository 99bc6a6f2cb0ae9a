from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

import pandas as pd


@dataclass
class ColumnDefinition:
    """Schema descriptor for one column of an expense editor table."""

    field: str
    label: str
    kind: str = "text"  # text | number | select
    default: Any = ""
    options: List[str] | None = None
    min_value: float | None = None
    step: float | None = None
    format: str | None = None
    help: str | None = None
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "label": self.label,
            "kind": self.kind,
            "default": self.default,
            "options": self.options or [],
            "min": self.min_value,
            "step": self.step,
            "format": self.format,
            "help": self.help,
            "required": self.required,
        }


@dataclass
class TableModel:
    """Editor table schema plus the rows it starts with."""

    name: str
    columns: List[ColumnDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def field_names(self) -> List[str]:
        return [col.field for col in self.columns]

    def create_default_df(self) -> pd.DataFrame:
        if self.default_rows:
            return pd.DataFrame(self.default_rows, columns=self.field_names())
        return pd.DataFrame(columns=self.field_names())

    def blank_row(self) -> dict[str, Any]:
        return {col.field: col.default for col in self.columns}

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [col.to_dict() for col in self.columns],
            "defaults": list(self.default_rows),
            "blank": self.blank_row(),
        }
