"""JSON formatter for clone reports."""

import json
from dataclasses import asdict
from typing import Any, Dict, List

from ..detection import Clone, DetectionResult
from .base import BaseFormatter


def clone_to_dict(clone: Clone) -> Dict[str, Any]:
    return {
        "source_start": clone.source_start,
        "source_end": clone.source_end,
        "line_count": clone.line_count,
        "targets": [
            {"name": t.name, "start": t.start_line, "end": t.end_line}
            for t in clone.targets
        ],
    }


class JsonFormatter(BaseFormatter):
    """Render results as JSON."""

    def render(self, results: List[DetectionResult]) -> None:
        print(self.format(results))

    def format(self, results: List[DetectionResult]) -> str:
        data = []
        for result in results:
            entry = asdict(result)
            entry["file"] = entry.pop("name")
            entry["clones"] = [clone_to_dict(c) for c in result.clones]
            entry["elapsed_seconds"] = round(result.elapsed_seconds, 6)
            data.append(entry)
        return json.dumps(data, indent=2)
