"""Data models for the competition results summary."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class TableBlock:
    """One detected results table inside a worksheet."""
    header_row: int                   # 1-based row of the header
    columns: Dict[str, int]           # role -> 0-based column index, -1 if absent
    title: str = ''                   # "TRA Women - 14-15yrs" scraped from above
    start_row: int = 0                # first data row (1-based)
    end_row: int = 0                  # last row consumed (1-based, inclusive)

    def column(self, role: str) -> int:
        return self.columns.get(role, -1)


@dataclass(frozen=True)
class ResultRecord:
    """A single competitor result. Immutable apart from the highlight pass."""
    position: str
    name: str
    club: str
    total_score: str
    discipline: str                   # display discipline: "DMT", "Trampoline"
    discipline_code: str              # "TRA", "TPD", "DMT", "DMD", ...
    category_part: str
    age_group: str
    aggregate_age: str
    source_sheet: str
    source_row: int
    is_green: bool = False

    @property
    def source_key(self) -> Tuple[str, int]:
        return (self.source_sheet, self.source_row)

    def to_dict(self) -> Dict[str, object]:
        """Serialize with the camelCase keys used by the report page."""
        return {
            'position': self.position,
            'name': self.name,
            'club': self.club,
            'totalScore': self.total_score,
            'discipline': self.discipline,
            'disciplineCode': self.discipline_code,
            'categoryPart': self.category_part,
            'ageGroup': self.age_group,
            'aggregateAge': self.aggregate_age,
            'sourceSheet': self.source_sheet,
            'sourceRow': self.source_row,
            'isGreen': self.is_green,
        }


@dataclass
class ReportDataset:
    """Records in report order plus the option lists for each filter."""
    records: List[ResultRecord] = field(default_factory=list)
    disciplines: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    age_groups: List[str] = field(default_factory=list)
    clubs: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.records)


@dataclass
class Classification:
    """Outcome of the discipline/category/age cascade for one data row."""
    discipline_code: str
    category_part: str
    age_group: str
    aggregate_age: str
    discipline: str
    full_discipline: Optional[str] = None
