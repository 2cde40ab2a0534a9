"""Reporters 模块 - 报告生成器。

此模块提供：
- JSONReporter: 输出 JSON 格式报告
- TableReporter: 输出终端表格（Rich）
"""

from __future__ import annotations

from .json_reporter import JSONReporter
from .table_reporter import TableReporter

__all__ = [
    "JSONReporter",
    "TableReporter",
]
