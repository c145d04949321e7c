"""Tool/curve cross-reference: which curves each tool produces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .collections import Curves, Tools
from .models import CatalogWarning


log = logging.getLogger("pwls.catalog.crossref")

SOURCE = "curvesByTool"


@dataclass(frozen=True)
class CurveLink:
    tool_code: str
    tool_company_code: int | None
    curve_mnemonic: str
    curve_company_code: int | None

    @classmethod
    def same_company(cls, tool_code: str, curve_mnemonic: str,
                     company_code: int | None) -> CurveLink:
        """Link for sources that carry a single company column per row."""
        return cls(tool_code, company_code, curve_mnemonic, company_code)

    @property
    def is_valid(self) -> bool:
        """Codes are str, company codes int or None."""
        return (isinstance(self.tool_code, str) and isinstance(self.curve_mnemonic, str)
                and all(c is None or (isinstance(c, int) and not isinstance(c, bool))
                        for c in (self.tool_company_code, self.curve_company_code)))

    @property
    def tool_key(self) -> tuple[str, int | None]:
        return (self.tool_code, self.tool_company_code)

    @property
    def curve_key(self) -> tuple[str, int | None]:
        return (self.curve_mnemonic, self.curve_company_code)


def link_curves(tools: Tools, curves: Curves, links: Iterable[CurveLink]) -> list[CatalogWarning]:
    """Attach curves to tools.  Malformed links and links with an unknown side are skipped."""
    warnings: list[CatalogWarning] = []
    n_linked = 0

    for link in links:
        if not link.is_valid:
            msg = (f"Invalid link: tool={link.tool_code!r} curve={link.curve_mnemonic!r} "
                   f"company={link.tool_company_code!r}")
            log.warning("%s", msg)
            warnings.append(CatalogWarning(SOURCE, f"{link.tool_code}/{link.curve_mnemonic}", msg))
            continue

        tool = tools.find(*link.tool_key)
        curve = curves.find(*link.curve_key)

        if tool is None:
            msg = f"Unknown tool: {link.tool_code} for company={link.tool_company_code}"
            log.warning("%s", msg)
            warnings.append(CatalogWarning(SOURCE, f"{link.tool_code}/{link.curve_mnemonic}", msg))
        if curve is None:
            msg = f"Unknown curve: {link.curve_mnemonic} for company={link.curve_company_code}"
            log.warning("%s", msg)
            warnings.append(CatalogWarning(SOURCE, f"{link.tool_code}/{link.curve_mnemonic}", msg))

        if tool is not None and curve is not None and tool.add_curve(curve):
            n_linked += 1

    log.info("Linked %d curves to tools", n_linked)
    return warnings
