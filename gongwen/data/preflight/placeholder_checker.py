"""占位符预检."""

import re
from typing import List

from gongwen.data.models import PreflightIssue
from gongwen.data.placeholder_normalizer import find_placeholders
from gongwen.data.preflight.base_checker import PreflightChecker

# 按关键词细分占位类别，仅用于展示，先匹配者优先
PLACEHOLDER_KINDS = [
    ("文号", re.compile(r"文号|发文")),
    ("日期", re.compile(r"日期|YYYY")),
    ("主送", re.compile(r"主送")),
    ("落款", re.compile(r"落款|署名")),
    ("附件", re.compile(r"附件")),
]
GENERIC_KIND = "占位"


def placeholder_kind(text: str) -> str:
    for kind, pattern in PLACEHOLDER_KINDS:
        if pattern.search(text):
            return kind
    return GENERIC_KIND


class PlaceholderChecker(PreflightChecker):
    """逐个列出文档中的占位符."""

    def check(self, text: str) -> List[PreflightIssue]:
        issues = []
        for span in find_placeholders(text):
            kind = placeholder_kind(span.text)
            label = f"占位：{span.text}" if kind == GENERIC_KIND else f"{kind}占位：{span.text}"
            issues.append(PreflightIssue(
                id=f"placeholder-{span.start}",
                label=label,
                position=span.start,
                category="placeholder",
            ))
        return issues
