# ============================================
# File: src/ride_recap/pipeline/__init__.py
# Description:
#   Public orchestration functions for the ride_recap pipeline.
#
#   Exposes:
#     - build_recap()  pure aggregation, rows in -> recap dict out
#     - run_recap()    read the export folder, aggregate, write data.js
# ============================================

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .load_export import load_export
from .recap import build_recap
from .write_output import DEFAULT_OUTPUT_FILE, write_data_js, write_json


def run_recap(
    data_dir: Optional[str | Path] = None,
    output: Optional[str | Path] = None,
    fmt: str = "js",
) -> Path:
    """
    Full pipeline: load the export, aggregate it, write the result.

    Args:
        data_dir: export root folder (default: "Uber Data").
        output: output file (default: data.js).
        fmt: "js" for a window.UBER_DATA script, "json" for plain JSON.

    Returns:
        Path: the written output file.
    """
    if fmt not in ("js", "json"):
        raise ValueError(f"Unknown output format: {fmt!r} (expected 'js' or 'json')")

    datasets = load_export(data_dir)
    print(
        f"\nTotal: {len(datasets['trips'])} trips and "
        f"{len(datasets['orders'])} order items"
    )

    recap = build_recap(
        datasets["trips"],
        datasets["orders"],
        datasets["profile"],
        datasets["ratings"],
    )

    out_path = Path(output) if output is not None else DEFAULT_OUTPUT_FILE
    if fmt == "json":
        written = write_json(recap, out_path)
    else:
        written = write_data_js(recap, out_path)

    years = [y for y in recap["years"] if y != "Lifetime"]
    print(f"\n✓ Generated {written} successfully")
    print(f"  Years: {', '.join(years)}")
    return written


__all__ = ["build_recap", "run_recap"]
