"""
CSV / Excel export of a company's scheme suggestions.
"""
import io

import pandas as pd

from scoring.evaluator import Suggestion

COLUMNS = ["Code", "Scheme", "Category", "Status", "Score", "Reason"]


def suggestions_dataframe(suggestions: list[Suggestion]) -> pd.DataFrame:
    rows = []
    for s in suggestions:
        scheme = s.scheme
        rows.append(
            {
                "Code": scheme.code,
                "Scheme": scheme.title,
                "Category": scheme.category or "",
                "Status": "Mandatory" if s.mandatory else "Voluntary",
                "Score": s.score,
                "Reason": s.reason,
            }
        )
    return pd.DataFrame(rows, columns=COLUMNS)


def generate_csv(suggestions: list[Suggestion]) -> bytes:
    """UTF-8 with BOM so Excel opens the arrows and dashes correctly."""
    df = suggestions_dataframe(suggestions)
    return df.to_csv(index=False).encode("utf-8-sig")


def generate_excel(suggestions: list[Suggestion], sheet_name: str = "Suggestions") -> io.BytesIO:
    df = suggestions_dataframe(suggestions)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name[:31])
    output.seek(0)
    return output
