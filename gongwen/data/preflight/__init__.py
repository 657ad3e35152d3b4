"""预检包."""

from typing import List, Optional

from loguru import logger

from gongwen.data.models import PreflightIssue, WritingMode
from gongwen.data.preflight.base_checker import PreflightChecker
from gongwen.data.preflight.gov_checker import GovChecker
from gongwen.data.preflight.paper_checker import PaperChecker
from gongwen.data.preflight.placeholder_checker import PlaceholderChecker

__all__ = [
    'PreflightChecker',
    'GovChecker',
    'PaperChecker',
    'PlaceholderChecker',
    'build_preflight_items',
    'missing_elements',
]


def build_preflight_items(
    text: str, mode: WritingMode = WritingMode.GOV, selected_sections: Optional[List[str]] = None
) -> List[PreflightIssue]:
    """按写作模式执行预检.

    Args:
        text: 文档文本
        mode: 写作模式
        selected_sections: 论文模式下选中的章节key

    Returns:
        预检问题列表；只作提示，不阻止导出
    """
    checker = PaperChecker(selected_sections) if mode == WritingMode.PAPER else GovChecker()
    issues = checker.check(text)
    if issues:
        logger.warning(f"预检发现 {len(issues)} 项问题：{'；'.join(issue.label for issue in issues[:5])}")
    return issues


def missing_elements(text: str) -> List[str]:
    """公文缺失要素名称列表."""
    if not text.strip():
        return []
    return GovChecker().missing_elements(text)
