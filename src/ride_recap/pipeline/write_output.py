from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

DEFAULT_OUTPUT_FILE = Path("data.js")
JS_GLOBAL = "window.UBER_DATA"


def write_data_js(recap: Mapping[str, Any], path: str | Path = DEFAULT_OUTPUT_FILE) -> Path:
    """Write the recap as a script assigning it to window.UBER_DATA."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(
        f"{JS_GLOBAL} = {json.dumps(recap, indent=2, ensure_ascii=False)}",
        encoding="utf-8",
    )
    return out


def write_json(recap: Mapping[str, Any], path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as f:
        json.dump(recap, f, indent=2, ensure_ascii=False)
    return out
