"""公文要素预检.

检查标题、主送、落款、成文日期是否缺失，文号/标题/主送的先后顺序，并列出占位符。
"""

import re
from typing import List, Optional, Sequence

from gongwen.config.settings import settings
from gongwen.data.line_classifier import detect_title_index, is_doc_number
from gongwen.data.models import PreflightIssue
from gongwen.data.placeholder_normalizer import DATE_PLACEHOLDER, FULL_DATE_PATTERN, is_confirmed_placeholder
from gongwen.data.preflight.base_checker import PreflightChecker
from gongwen.data.preflight.placeholder_checker import PlaceholderChecker, placeholder_kind

ADDRESSEE_EXCLUDED_PREFIXES = ("附件", "抄送", "主送")
PLACEHOLDER_SIGNATURE_MARK = "〔占位"
DOC_NUMBER_KIND = "文号"
ELEMENT_NAMES = {"title": "标题", "addressee": "主送", "signature": "落款", "date": "成文日期"}


def find_addressee_index(lines: Sequence[str]) -> int:
    """主送行：以全角冒号结尾，且不是附件/抄送/主送说明."""
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if line.endswith("：") and not line.startswith(ADDRESSEE_EXCLUDED_PREFIXES):
            return index
    return -1


def find_doc_number_index(lines: Sequence[str]) -> int:
    """文号行：整行被〔〕包裹.

    落款、日期等非文号类占位行同样整行被〔〕包裹，不作为文号。
    """
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not is_doc_number(line):
            continue
        if is_confirmed_placeholder(line) and placeholder_kind(line) != DOC_NUMBER_KIND:
            continue
        return index
    return -1


def find_date_index(lines: Sequence[str]) -> int:
    for index, line in enumerate(lines):
        if FULL_DATE_PATTERN.search(line) or DATE_PLACEHOLDER in line:
            return index
    return -1


def has_signature(lines: Sequence[str], keywords: Sequence[str], window: int) -> bool:
    """落款只在文末若干行内识别，占位标记也视为落款."""
    trimmed = list(lines)
    while trimmed and not trimmed[-1].strip():
        trimmed.pop()
    if window <= 0:
        return False
    pattern = re.compile("|".join([re.escape(word) for word in keywords if word] + [re.escape(PLACEHOLDER_SIGNATURE_MARK)]))
    return any(pattern.search(line) for line in trimmed[-window:])


class GovChecker(PreflightChecker):
    """公文模式预检."""

    def __init__(
        self,
        signature_keywords: Optional[List[str]] = None,
        signature_window: Optional[int] = None,
    ) -> None:
        """初始化公文预检.

        Args:
            signature_keywords: 落款识别关键词，默认取配置
            signature_window: 落款识别的末尾行数，默认取配置
        """
        if signature_keywords is None:
            signature_keywords = settings.document.signature_keywords
        if signature_window is None:
            signature_window = settings.document.signature_window
        self.signature_keywords = signature_keywords
        self.signature_window = signature_window
        self.placeholder_checker = PlaceholderChecker()

    def missing_elements(self, text: str) -> List[str]:
        """返回缺失的公文要素名称（标题、主送、落款、成文日期）."""
        return [ELEMENT_NAMES[issue.id] for issue in self._missing_issues(text)]

    def check(self, text: str) -> List[PreflightIssue]:
        lines = re.split(r"\r?\n", text)
        issues = self._missing_issues(text)

        title_index = detect_title_index(lines)
        doc_number_index = find_doc_number_index(lines)
        addressee_index = find_addressee_index(lines)
        end = len(text)
        if doc_number_index >= 0 and title_index >= 0 and doc_number_index > title_index:
            issues.append(PreflightIssue("order-doc-title", "要素顺序：文号应在标题之前", end, "order"))
        if title_index >= 0 and addressee_index >= 0 and title_index > addressee_index:
            issues.append(PreflightIssue("order-title-addressee", "要素顺序：标题应在主送之前", end, "order"))

        issues.extend(self.placeholder_checker.check(text))
        return issues

    def _missing_issues(self, text: str) -> List[PreflightIssue]:
        lines = re.split(r"\r?\n", text)
        end = len(text)
        issues = []
        if detect_title_index(lines) < 0:
            issues.append(self._missing("title", 0))
        if find_addressee_index(lines) < 0:
            issues.append(self._missing("addressee", 0))
        if not has_signature(lines, self.signature_keywords, self.signature_window):
            issues.append(self._missing("signature", end))
        if find_date_index(lines) < 0:
            issues.append(self._missing("date", end))
        return issues

    @staticmethod
    def _missing(element: str, position: int) -> PreflightIssue:
        return PreflightIssue(element, f"缺失：{ELEMENT_NAMES[element]}", position, "missing")
