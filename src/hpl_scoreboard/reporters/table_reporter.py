"""Table 报告生成器 - 使用 Rich 输出终端排行榜。"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hpl_scoreboard.stats import summarize

if TYPE_CHECKING:
    from hpl_scoreboard.types import FeedSnapshot


class TableReporter:
    """终端表格报告生成器（使用 Rich）。

    输出汇总表和排行榜表，适合 CLI 展示。
    """

    @staticmethod
    def generate(
        snapshot: FeedSnapshot,
        console: Console | None = None,
        limit: int | None = None,
    ) -> None:
        """生成并打印终端表格。

        Args:
            snapshot: Feed 状态快照。
            console: Rich Console（None 则新建）。
            limit: 最多显示的行数（None 表示全部）。
        """
        console = console or Console()
        summary = summarize(snapshot.records)

        # === 汇总 ===
        summary_table = Table(title="HPL Scoreboard Summary", show_header=True, header_style="bold")
        summary_table.add_column("Metric", style="cyan")
        summary_table.add_column("Value", style="magenta")

        summary_table.add_row("Top Score", f"{summary.top_gflops:.2f} GFLOPS")
        summary_table.add_row("Average", f"{summary.avg_gflops:.2f} GFLOPS")
        summary_table.add_row("Total", f"{summary.total} submissions")
        summary_table.add_row("Pages Loaded", str(snapshot.last_successful_page))
        summary_table.add_row("More Available", "yes" if snapshot.has_more else "no")
        if snapshot.last_error:
            summary_table.add_row("Last Error", f"[red]{escape(snapshot.last_error)}[/red]")

        console.print(summary_table)
        console.print()

        if not snapshot.records:
            console.print("[dim]No submissions yet[/dim]")
            return

        # === 排行榜 ===
        board = Table(title="Leaderboard", show_header=True, header_style="bold")
        board.add_column("Rank", justify="right")
        board.add_column("Student ID", style="cyan")
        board.add_column("GFLOPS", justify="right", style="magenta")
        board.add_column("N", justify="right")
        board.add_column("NB", justify="right")
        board.add_column("P x Q", justify="center")
        board.add_column("Submitted", style="dim")

        rows = snapshot.records if limit is None else snapshot.records[:limit]
        for rank, record in enumerate(rows, start=1):
            board.add_row(
                f"#{rank}",
                escape(record.user_id),
                f"{record.gflops:.2f}",
                str(record.problem_size_n),
                str(record.block_size_nb),
                f"{record.p} x {record.q}",
                record.submitted_at,
            )

        console.print(board)
        if limit is not None and len(snapshot.records) > limit:
            console.print(f"[dim]... {len(snapshot.records) - limit} more row(s)[/dim]")
