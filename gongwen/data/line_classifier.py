"""行结构识别.

按优先级自上而下匹配规则表，首个命中的规则决定行的角色。
标题与落款依赖全文信息（标题行号、最后两个非空行号），由 build_context 预先计算。
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from gongwen.data.models import LineRole

DOC_TYPE_KEYWORDS = ("通知", "报告", "请示", "总结")
DOC_HEADER_SUFFIX = "文件"
DOC_HEADER_MAX_LENGTH = 12
TITLE_MAX_LENGTH = 30

DOC_NUMBER_PATTERN = re.compile(r"^\s*〔.*〕\s*$")
TITLE_KEYWORD_PATTERN = re.compile("|".join(DOC_TYPE_KEYWORDS))
ATTACHMENT_PATTERN = re.compile(r"^附件[:：]")
SECTION_HEADING_PATTERN = re.compile(r"^[一二三四五六七八九十]+、")
DISTRIBUTION_PREFIXES = ("抄送", "主送")
PRINT_KEYWORD = "印发"
FULLWIDTH_COLON = "："


@dataclass(frozen=True)
class DocumentContext:
    """全文上下文，行号均为原始行序号，-1 表示不存在."""

    title_index: int = -1
    last_index: int = -1
    second_last_index: int = -1


def is_doc_header(line: str) -> bool:
    return line.endswith(DOC_HEADER_SUFFIX) and len(line) <= DOC_HEADER_MAX_LENGTH


def is_doc_number(line: str) -> bool:
    return DOC_NUMBER_PATTERN.match(line) is not None


def detect_title_index(lines: Sequence[str]) -> int:
    """查找标题行.

    跳过版头与文号行，第一个不超过30字且含文种关键词的行即为标题。

    Args:
        lines: 文档行列表

    Returns:
        标题行号，没有标题时返回 -1
    """
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line:
            continue
        if is_doc_header(line) or is_doc_number(line):
            continue
        if len(line) <= TITLE_MAX_LENGTH and TITLE_KEYWORD_PATTERN.search(line):
            return index
    return -1


def build_context(lines: Sequence[str]) -> DocumentContext:
    """计算全文上下文."""
    non_blank = [index for index, line in enumerate(lines) if line.strip()]
    return DocumentContext(
        title_index=detect_title_index(lines),
        last_index=non_blank[-1] if non_blank else -1,
        second_last_index=non_blank[-2] if len(non_blank) > 1 else -1,
    )


# 规则：(角色, 判定函数(去空白后的行, 行号, 上下文))
Rule = Tuple[LineRole, Callable[[str, int, DocumentContext], bool]]

RULES: List[Rule] = [
    (LineRole.BLANK, lambda line, index, ctx: not line),
    (LineRole.DOC_HEADER, lambda line, index, ctx: is_doc_header(line)),
    (LineRole.DOC_NUMBER, lambda line, index, ctx: is_doc_number(line)),
    (LineRole.TITLE, lambda line, index, ctx: index == ctx.title_index),
    # 近似规则：无落款的文档会把末尾的短正文行误判为落款
    (LineRole.SIGNATURE, lambda line, index, ctx: index in (ctx.last_index, ctx.second_last_index)),
    (LineRole.POST_DISTRIBUTION, lambda line, index, ctx: line.startswith(DISTRIBUTION_PREFIXES)),
    (LineRole.PRINT_NOTICE, lambda line, index, ctx: line.startswith(PRINT_KEYWORD) or line.endswith(PRINT_KEYWORD)),
    (LineRole.ATTACHMENT, lambda line, index, ctx: ATTACHMENT_PATTERN.match(line) is not None),
    (LineRole.ADDRESSEE, lambda line, index, ctx: line.endswith(FULLWIDTH_COLON)),
    (LineRole.SECTION_HEADING, lambda line, index, ctx: SECTION_HEADING_PATTERN.match(line) is not None),
]


def classify_line(line: str, index: int, context: DocumentContext) -> LineRole:
    """识别单行的结构角色.

    Args:
        line: 行文本
        index: 行号
        context: 全文上下文

    Returns:
        行角色，未命中任何规则时为正文
    """
    stripped = line.strip()
    for role, predicate in RULES:
        if predicate(stripped, index, context):
            return role
    return LineRole.BODY


def classify_lines(lines: Sequence[str]) -> List[LineRole]:
    """识别全部行的结构角色."""
    context = build_context(lines)
    return [classify_line(line, index, context) for index, line in enumerate(lines)]
