"""占位符识别与日期占位处理.

占位符是〔〕包裹、且含“占位”或 YYYY/MM/DD 记号的片段，表示“值未知，需人工填写”。
生成文本若自行编造了成文日期，而用户指令中并未给出日期，则替换为标准占位符。
"""

import re
from typing import Iterator, List

from loguru import logger

from gongwen.data.models import PlaceholderSpan

PLACEHOLDER_OPEN = "〔"
PLACEHOLDER_CLOSE = "〕"
DATE_PLACEHOLDER = "〔占位：YYYY年MM月DD日〕"
YEAR_TOKEN = "YYYY"

BRACKET_SPAN_PATTERN = re.compile(r"〔[^〕\n]*〕")
PLACEHOLDER_KEYWORD_PATTERN = re.compile(r"占位|YYYY|MM|DD")

FULL_DATE_PATTERN = re.compile(r"\d{4}年\d{1,2}月\d{1,2}日")
EXACT_DATE_LINE_PATTERN = re.compile(r"^\d{4}年\d{1,2}月\d{1,2}日$")
BRACKET_LINE_WITH_YEAR_PATTERN = re.compile(r"^\s*〔.*\d{4}.*〕\s*$")
# 指令中可识别的日期表达
PROMPT_DATE_PATTERNS = [
    FULL_DATE_PATTERN,
    re.compile(r"\d{4}年"),
    re.compile(r"\d{4}[-/.]\d{1,2}[-/.]\d{1,2}"),
]

_BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")


def is_confirmed_placeholder(segment: str) -> bool:
    """判断片段是否为占位符（〔〕包裹且含占位关键词）."""
    return (
        segment.startswith(PLACEHOLDER_OPEN)
        and segment.endswith(PLACEHOLDER_CLOSE)
        and PLACEHOLDER_KEYWORD_PATTERN.search(segment) is not None
    )


def iter_bracket_spans(text: str, start: int = 0) -> Iterator[re.Match]:
    """从 start 处开始迭代〔〕片段，不共享任何匹配状态."""
    return BRACKET_SPAN_PATTERN.finditer(text, start)


def find_placeholders(text: str, start: int = 0) -> List[PlaceholderSpan]:
    """查找文本中所有占位符.

    Args:
        text: 文档文本
        start: 起始偏移

    Returns:
        占位符列表，偏移相对于整个文本
    """
    return [
        PlaceholderSpan(text=match.group(0), start=match.start(), end=match.end(), is_placeholder=True)
        for match in iter_bracket_spans(text, start)
        if is_confirmed_placeholder(match.group(0))
    ]


def split_placeholder_segments(text: str) -> List[PlaceholderSpan]:
    """把一行文本切分为普通片段与〔〕片段，空片段丢弃.

    Args:
        text: 行文本

    Returns:
        按顺序排列的片段列表
    """
    segments = []
    cursor = 0
    for match in iter_bracket_spans(text):
        if match.start() > cursor:
            segments.append(PlaceholderSpan(text[cursor:match.start()], cursor, match.start()))
        bracket = match.group(0)
        segments.append(
            PlaceholderSpan(bracket, match.start(), match.end(), is_confirmed_placeholder(bracket))
        )
        cursor = match.end()
    if cursor < len(text):
        segments.append(PlaceholderSpan(text[cursor:], cursor, len(text)))
    return segments


def normalize_content(value: str) -> str:
    """清理生成文本：去除Markdown加粗、统一换行并去掉尾部空白."""
    without_bold = _BOLD_PATTERN.sub(r"\1", value).replace("__", "")
    return without_bold.replace("\r\n", "\n").rstrip()


def prompt_has_date(user_prompt: str) -> bool:
    """判断用户指令中是否给出了日期."""
    return any(pattern.search(user_prompt or "") for pattern in PROMPT_DATE_PATTERNS)


def apply_date_placeholders(value: str, user_prompt: str) -> str:
    """将未经用户指定的日期替换为占位符.

    用户指令含日期时原样返回；否则整行为完整日期的替换为标准日期占位符，
    整行为〔〕且含四位年份的，将年份替换为 YYYY。

    Args:
        value: 规范化后的文本
        user_prompt: 生成该文本的用户指令

    Returns:
        处理后的文本
    """
    if prompt_has_date(user_prompt):
        return value

    cleaned = []
    replaced = 0
    for line in value.split("\n"):
        trimmed = line.strip()
        if EXACT_DATE_LINE_PATTERN.match(trimmed):
            cleaned.append(DATE_PLACEHOLDER)
            replaced += 1
        elif BRACKET_LINE_WITH_YEAR_PATTERN.match(trimmed):
            cleaned.append(re.sub(r"\d{4}", YEAR_TOKEN, trimmed))
            replaced += 1
        else:
            cleaned.append(line)

    if replaced:
        logger.info(f"指令未指定日期，已将 {replaced} 处日期替换为占位符")
    return "\n".join(cleaned)
