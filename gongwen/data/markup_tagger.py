"""公文标记文本生成与解析.

标记词表（每行一个）：
    <doch>…</doch>      版头
    <docsh>…</docsh>    发文字号
    # …                 标题
    <apl>…</apl>        主送
    <ih3>…</ih3>        层次标题
    <sign>…</sign>      落款
    <attach>…</attach>  附件
    <post>…</post>      抄送
    <print>…</print>    印发
    <note>…</note>      行内注释（可出现在正文中）
"""

import re
from typing import Dict, List, Tuple

from loguru import logger

from gongwen.data.line_classifier import build_context, classify_line
from gongwen.data.models import LineRole, TaggedLine

TITLE_PREFIX = "# "

ROLE_TAGS: Dict[LineRole, str] = {
    LineRole.DOC_HEADER: "doch",
    LineRole.DOC_NUMBER: "docsh",
    LineRole.ADDRESSEE: "apl",
    LineRole.SECTION_HEADING: "ih3",
    LineRole.SIGNATURE: "sign",
    LineRole.ATTACHMENT: "attach",
    LineRole.POST_DISTRIBUTION: "post",
    LineRole.PRINT_NOTICE: "print",
}
TAG_ROLES: Dict[str, LineRole] = {tag: role for role, tag in ROLE_TAGS.items()}

NOTE_PATTERN = re.compile(r"<note>(.*?)</note>")
_WRAPPED_PATTERN = re.compile(r"^<(\w+)>(.*)</\1>$")


def split_lines(text: str) -> List[str]:
    return re.split(r"\r?\n", text)


def tag_text(text: str) -> List[TaggedLine]:
    """把原始文档文本转换为标记记录.

    空行保留为空记录，非空行去除首尾空白后按结构角色标记。

    Args:
        text: 文档文本（未标记）

    Returns:
        标记记录列表，与原始行一一对应
    """
    lines = split_lines(text)
    context = build_context(lines)
    tagged = [
        TaggedLine(role=classify_line(line, index, context), text=line.strip())
        for index, line in enumerate(lines)
    ]
    logger.debug(f"标记完成：{len(tagged)} 行，标题行号 {context.title_index}")
    return tagged


def serialize_line(line: TaggedLine) -> str:
    if line.role == LineRole.BLANK:
        return ""
    if line.role == LineRole.TITLE:
        return f"{TITLE_PREFIX}{line.text}"
    tag = ROLE_TAGS.get(line.role)
    if tag is None:
        return line.text
    return f"<{tag}>{line.text}</{tag}>"


def to_markup(tagged: List[TaggedLine]) -> str:
    """序列化为标记文本."""
    return "\n".join(serialize_line(line) for line in tagged)


def build_markup(text: str) -> str:
    """原始文本直接生成标记文本."""
    return to_markup(tag_text(text))


def parse_markup_line(raw_line: str) -> TaggedLine:
    """解析一行标记文本，无法识别的标记按正文处理."""
    line = raw_line.strip()
    if not line:
        return TaggedLine(LineRole.BLANK, "")
    if line.startswith(TITLE_PREFIX):
        return TaggedLine(LineRole.TITLE, line[len(TITLE_PREFIX):])
    match = _WRAPPED_PATTERN.match(line)
    if match and match.group(1) in TAG_ROLES:
        return TaggedLine(TAG_ROLES[match.group(1)], match.group(2))
    return TaggedLine(LineRole.BODY, line)


def parse_markup(markup: str) -> List[TaggedLine]:
    """把标记文本还原为标记记录."""
    return [parse_markup_line(line) for line in split_lines(markup)]


def visible_text(tagged: List[TaggedLine]) -> str:
    """去除标记后的文本，用于重新识别."""
    return "\n".join(line.text for line in tagged)


def split_notes(text: str) -> List[Tuple[str, bool]]:
    """切分行内注释.

    Returns:
        (片段文本, 是否为注释) 列表
    """
    parts = []
    cursor = 0
    for match in NOTE_PATTERN.finditer(text):
        if match.start() > cursor:
            parts.append((text[cursor:match.start()], False))
        parts.append((match.group(1), True))
        cursor = match.end()
    if cursor < len(text):
        parts.append((text[cursor:], False))
    return parts
