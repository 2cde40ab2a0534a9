"""JSON 报告生成器 - 输出排行榜记录与汇总统计。"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

from hpl_scoreboard.stats import summarize

if TYPE_CHECKING:
    from hpl_scoreboard.types import FeedSnapshot


class JSONReporter:
    """JSON 格式报告生成器。

    输出格式：
    ```json
    {
      "summary": {"top_gflops": ..., "avg_gflops": ..., "total": ...},
      "has_more": false,
      "pages_loaded": 2,
      "records": [{"rank": 1, "id": "...", ...}],
      "timestamp": "2026-01-17T10:30:00"
    }
    ```
    """

    @staticmethod
    def generate(
        snapshot: FeedSnapshot,
        output_path: Path | str | None = None,
        **extra_fields: Any,
    ) -> str:
        """生成 JSON 报告。

        Args:
            snapshot: Feed 状态快照。
            output_path: 输出文件路径（None 则不保存）。
            **extra_fields: 额外字段（如 source, timestamp 等）。

        Returns:
            JSON 字符串。
        """
        report: dict[str, Any] = {
            "summary": asdict(summarize(snapshot.records)),
            "has_more": snapshot.has_more,
            "pages_loaded": snapshot.last_successful_page,
            # 排名按位置计算，服务端顺序即排名
            "records": [
                {"rank": i + 1, **record.to_dict()} for i, record in enumerate(snapshot.records)
            ],
        }

        report.update(extra_fields)

        json_str = json.dumps(report, indent=2, ensure_ascii=False)

        if output_path:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json_str, encoding="utf-8")

        return json_str

    @staticmethod
    def load(file_path: Path | str) -> dict[str, Any]:
        """从 JSON 文件加载报告。"""
        return json.loads(Path(file_path).read_text(encoding="utf-8"))
