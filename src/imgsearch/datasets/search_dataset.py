from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..geometry import ZERO_RECT, Rectangle


@dataclass(slots=True)
class SearchCase:
    """
    A haystack image and where the needle is expected to be found in it.

    ``expected_x``/``expected_y`` are ``None`` when the needle should be absent.
    """

    name: str
    image_path: Path
    expected_x: Optional[int]
    expected_y: Optional[int]

    @property
    def expects_match(self) -> bool:
        return self.expected_x is not None

    def expected_rect(self, width: int, height: int) -> Rectangle:
        if self.expected_x is None or self.expected_y is None:
            return ZERO_RECT
        return Rectangle.from_size(self.expected_x, self.expected_y, width, height)


@dataclass(slots=True)
class SearchDataset:
    """
    Needle image plus the haystack cases it is searched in.
    """

    needle_path: Path
    cases: List[SearchCase]
    root: Path


def load_search_dataset(
    root: Path | str,
    csv_name: str = "expected.csv",
    needle_name: str | None = None,
) -> SearchDataset:
    """
    Load a search dataset with standard folder layout.

    Expected directory structure:
        root/
            needle/
            haystacks/
            csv/
    """
    root_path = Path(root)
    csv_path = root_path / "csv" / csv_name
    haystacks_dir = root_path / "haystacks"
    needle_dir = root_path / "needle"

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")
    if not haystacks_dir.exists():
        raise FileNotFoundError(f"Haystacks directory not found: {haystacks_dir}")
    if not needle_dir.exists():
        raise FileNotFoundError(f"Needle directory not found: {needle_dir}")

    needle_path = _resolve_needle_path(needle_dir, needle_name)

    cases = _load_cases(csv_path, haystacks_dir)
    if not cases:
        raise ValueError(f"No cases found in {csv_path}")

    return SearchDataset(needle_path=needle_path, cases=cases, root=root_path)


def _resolve_needle_path(needle_dir: Path, needle_name: Optional[str]) -> Path:
    if needle_name:
        candidates = [needle_dir / needle_name]
        if not candidates[0].is_file():
            raise FileNotFoundError(f"Needle image not found: {candidates[0]}")
    else:
        candidates = sorted(path for path in needle_dir.iterdir() if path.is_file())

    if not candidates:
        raise FileNotFoundError(f"No needle files found under {needle_dir}")
    if len(candidates) > 1:
        names = ", ".join(path.name for path in candidates)
        raise ValueError(f"Multiple needles found under {needle_dir} ({names}). Pass needle_name to pick one.")
    return candidates[0]


def _parse_coordinate(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def _haystack_reference(row: dict, haystacks_dir: Path) -> Tuple[str, Path]:
    # "name" is relative to haystacks/; "path" may also be absolute
    reference = (row.get("name") or row.get("path") or "").strip()
    if not reference:
        raise ValueError(f"Row missing image reference: {row}")
    image_path = haystacks_dir / reference
    return image_path.name if Path(reference).is_absolute() else reference, image_path


def _load_cases(csv_path: Path, haystacks_dir: Path) -> List[SearchCase]:
    cases: List[SearchCase] = []
    with csv_path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError("CSV file must include a header row.")
        if "name" not in reader.fieldnames and "path" not in reader.fieldnames:
            raise ValueError("CSV header must contain either 'name' or 'path' columns.")

        for row in reader:
            try:
                x = _parse_coordinate(row.get("x"))
                y = _parse_coordinate(row.get("y"))
            except ValueError as exc:
                raise ValueError(f"Invalid coordinates in row: {row}") from exc
            if (x is None) != (y is None):
                raise ValueError(f"Row must give both x and y or neither: {row}")

            name, image_path = _haystack_reference(row, haystacks_dir)
            if not image_path.exists():
                raise FileNotFoundError(f"Image referenced in CSV missing: {image_path}")

            cases.append(SearchCase(name=name, image_path=image_path, expected_x=x, expected_y=y))

    return cases


__all__ = ["SearchCase", "SearchDataset", "load_search_dataset"]
