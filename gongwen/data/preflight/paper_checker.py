"""论文草稿预检.

章节标题为单独一行、内容与章节名称一致的行（允许以冒号结尾）；章节正文从标题行之后到下一个已识别标题（或文末），
字数按去除空白字符后计算。
"""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from gongwen.data.models import PreflightIssue, SectionSpec
from gongwen.data.preflight.base_checker import PreflightChecker
from gongwen.data.preflight.placeholder_checker import PlaceholderChecker
from gongwen.data.templates import PAPER_SECTION_SPECS

_WHITESPACE = re.compile(r"\s")


def count_characters(text: str) -> int:
    """统计不含空白字符的字数."""
    return len(_WHITESPACE.sub("", text))


def locate_headers(text: str, specs: Sequence[SectionSpec]) -> Dict[str, Tuple[int, int]]:
    """定位章节标题行.

    Returns:
        {章节key: (标题行起始偏移, 标题行结束偏移)}，只记录首次出现
    """
    positions = {}
    for spec in specs:
        pattern = re.compile(rf"^[ \t]*{re.escape(spec.label)}[ \t]*[:：]?[ \t]*$", re.MULTILINE)
        match = pattern.search(text)
        if match:
            positions[spec.key] = (match.start(), match.end())
    return positions


class PaperChecker(PreflightChecker):
    """论文模式预检."""

    def __init__(self, selected_keys: Optional[List[str]] = None, specs: Optional[List[SectionSpec]] = None):
        """初始化论文预检.

        Args:
            selected_keys: 选中的章节key，None 表示全部
            specs: 章节规格目录
        """
        self.specs = specs or PAPER_SECTION_SPECS
        self.selected = [
            spec for spec in self.specs if selected_keys is None or spec.key in selected_keys
        ]
        self.placeholder_checker = PlaceholderChecker()

    def check(self, text: str) -> List[PreflightIssue]:
        normalized = text.replace("\r\n", "\n")
        headers = locate_headers(normalized, self.specs)
        header_starts = sorted(start for start, _ in headers.values())
        issues = []

        for spec in self.selected:
            if spec.key not in headers:
                issues.append(PreflightIssue(f"missing-{spec.key}", f"缺失：{spec.label}", 0, "missing"))

        for spec in self.selected:
            if spec.key not in headers:
                continue
            start, body_start = headers[spec.key]
            end = next((pos for pos in header_starts if pos > start), len(normalized))
            count = count_characters(normalized[body_start:end])
            logger.debug(f"章节 {spec.label}: {count} 字（要求 {spec.min_length}-{spec.max_length}）")
            if not spec.accepts(count):
                issues.append(PreflightIssue(
                    id=f"len-{spec.key}",
                    label=f"{spec.label}字数不符合（{count}字，要求{spec.min_length}-{spec.max_length}字）",
                    position=start,
                    category="length",
                    count=count,
                ))

        issues.extend(self.placeholder_checker.check(text))
        return issues
