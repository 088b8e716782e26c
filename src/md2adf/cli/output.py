"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import sys
from typing import Any, Optional

from ..application.commands import CommandResult
from ..core.ports import IssueData


class Colors:
    """ANSI color codes."""
    
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    
    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for output."""
    
    CHECK = "✓"
    CROSS = "✗"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"


class Console:
    """Console output helper with colors and formatting."""
    
    def __init__(self, color: bool = True, stream=None):
        self.stream = stream or sys.stdout
        self.color = color and hasattr(self.stream, "isatty") and self.stream.isatty()
    
    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET
    
    def print(self, text: str = "") -> None:
        """Print text."""
        print(text, file=self.stream)
    
    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))
    
    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))
    
    def warning(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))
    
    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))
    
    def item(self, text: str, note: Optional[str] = None) -> None:
        """Print a list item."""
        note_str = self._c(f" [{note}]", Colors.DIM) if note else ""
        self.print(f"    {Symbols.DOT} {text}{note_str}")
    
    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))
        
        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))
        
        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)
    
    def dry_run_banner(self) -> None:
        """Print dry-run mode banner."""
        self.print()
        banner = f"  {Symbols.GEAR} DRY-RUN MODE - No changes will be made"
        if self.color:
            self.print(f"{Colors.BG_YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()
    
    def document_summary(self, document: dict[str, Any]) -> None:
        """Print the top-level block types of an ADF document."""
        blocks = document.get("content", [])
        self.info(f"{len(blocks)} top-level block(s)")
        for block in blocks:
            children = block.get("content") or []
            self.item(block.get("type", "?"), f"{len(children)} child node(s)" if children else None)
    
    def issue_table(self, issues: list[IssueData]) -> None:
        """Print issues one per row."""
        self.table(
            ["Key", "Status", "Assignee", "Summary"],
            [[i.key, i.status, i.assignee or "-", i.summary] for i in issues],
        )
    
    def issue_detail(self, issue: IssueData) -> None:
        """Print one issue with its plain-text description."""
        self.print(self._c(f"  {issue.key}: {issue.summary}", Colors.BOLD))
        self.item(f"Type: {issue.issue_type}")
        self.item(f"Status: {issue.status}")
        self.item(f"Priority: {issue.priority}")
        self.item(f"Assignee: {issue.assignee or 'Unassigned'}")
        if issue.description:
            self.print()
            self.print(f"  {issue.description}")
    
    def command_result(self, label: str, result: CommandResult) -> None:
        """Print the outcome of a command."""
        if not result.success:
            self.error(f"{label}: {result.error}")
        elif result.skipped:
            self.warning(f"{label}: skipped ({result.data})")
        elif result.dry_run:
            self.info(f"{label}: would be sent (dry-run)")
        else:
            self.success(f"{label}: done")
