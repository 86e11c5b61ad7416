import io
from typing import Any, Dict, List

import pandas as pd

from ..services.coercion import parse_cell


def read_csv_bytes(content: bytes, encoding: str = "utf-8") -> Dict[str, List[Any]]:
    """
    Parse CSV bytes into column-oriented lists of typed cells.

    Only an empty field counts as missing: tokens such as "N/A" are kept as
    text so they show up as present-but-non-numeric values. A data row with
    more fields than the header is rejected; a shorter row is padded with
    missing cells.
    """
    try:
        text = content.decode(encoding)
    except UnicodeDecodeError as e:
        raise ValueError(f"Invalid CSV format: could not decode file as {encoding}") from e

    # The header is read as row 0 so its width fixes the column count and
    # wider rows raise instead of turning the first column into an index.
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ValueError(f"Invalid CSV format: {e}") from e

    if df.shape[1] == 0:
        raise ValueError("Invalid CSV format: no columns found")

    header = [h.strip() if isinstance(h, str) else "" for h in df.iloc[0].tolist()]
    body = df.iloc[1:]

    return {
        # short rows come back as NaN
        name: [parse_cell(v) if isinstance(v, str) else None for v in body[col].tolist()]
        for col, name in zip(df.columns, header)
    }
