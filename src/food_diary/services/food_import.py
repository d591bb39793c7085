"""CSV parsing for bulk catalog imports."""

import csv
import io

from food_diary.services.normalizer import normalize_food_text

# Normalized header -> import field. The first non-empty column wins.
_COLUMNS: dict[str, str] = {
    "name": "name",
    "name ru": "name",
    "название": "name",
    "brand": "brand",
    "бренд": "brand",
    "barcode": "barcode",
    "штрихкод": "barcode",
    "category": "category",
    "категория": "category",
    "calories": "calories",
    "kcal": "calories",
    "калории": "calories",
    "protein": "protein_g",
    "protein g": "protein_g",
    "белки": "protein_g",
    "fat": "fat_g",
    "fat g": "fat_g",
    "жиры": "fat_g",
    "carbs": "carbs_g",
    "carbs g": "carbs_g",
    "углеводы": "carbs_g",
    "fiber": "fiber_g",
    "fiber g": "fiber_g",
    "клетчатка": "fiber_g",
    "aliases": "aliases",
    "синонимы": "aliases",
}

_NUMERIC_FIELDS = frozenset({"calories", "protein_g", "fat_g", "carbs_g", "fiber_g"})


def parse_csv_rows(text: str) -> list[dict[str, object]]:
    """Parse CSV text with a header row into import rows.

    Unknown columns are ignored, empty cells are left out so defaults apply,
    decimal commas are accepted and ``aliases`` is split on ``;``.
    """
    reader = csv.reader(io.StringIO(text.strip()))
    header = next(reader, None)
    if not header:
        return []
    fields = [_COLUMNS.get(normalize_food_text(column)) for column in header]

    rows: list[dict[str, object]] = []
    for values in reader:
        if not any(value.strip() for value in values):
            continue
        row: dict[str, object] = {}
        for field_name, value in zip(fields, values, strict=False):
            cleaned = value.strip()
            if field_name is None or not cleaned or field_name in row:
                continue
            if field_name == "aliases":
                row[field_name] = [alias.strip() for alias in cleaned.split(";") if alias.strip()]
            elif field_name in _NUMERIC_FIELDS:
                row[field_name] = cleaned.replace(",", ".")
            else:
                row[field_name] = cleaned
        rows.append(row)
    return rows
