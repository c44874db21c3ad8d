"""Render aggregated symbols into generated TypeScript source."""

from __future__ import annotations

from typing import List

from .models import AggregatedSymbols

EOL = "\n"

GENERATED_HEADER = (
    f"/*{EOL}"
    f" * This file is generated by ng-tooling. Don't edit by hand.{EOL}"
    f" */{EOL}{EOL}"
)


def render_module_index(aggregated: AggregatedSymbols, indent: str = "  ") -> str:
    """Return the text of a ``<module>.index.ts`` file.

    Identical input always yields identical text: imports are grouped by
    path, exports by kind, and both are sorted by name.
    """
    lines: List[str] = []
    for path, members in aggregated.by_path:
        names = ", ".join(symbol.import_clause() for symbol in members)
        lines.append(f"import {{ {names} }} from './{path}';{EOL}")

    for kind, members in aggregated.by_kind:
        lines.append(f"{EOL}export const {kind.value}: any[] = [{EOL}")
        for symbol in members:
            lines.append(f"{indent}{kind.element_prefix}{symbol.local_name},{EOL}")
        lines.append(f"];{EOL}")

    return GENERATED_HEADER + "".join(lines)


__all__ = ["EOL", "GENERATED_HEADER", "render_module_index"]
