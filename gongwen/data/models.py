"""数据模型定义."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class WritingMode(str, Enum):
    """写作模式."""

    GOV = "gov"  # 公文模式
    PAPER = "paper"  # 论文模式


class LineRole(str, Enum):
    """行的结构角色."""

    BLANK = "blank"
    DOC_HEADER = "doc_header"  # 版头（×××文件）
    DOC_NUMBER = "doc_number"  # 发文字号
    TITLE = "title"
    SECTION_HEADING = "section_heading"  # 一、二、层次标题
    ADDRESSEE = "addressee"  # 主送机关
    BODY = "body"
    ATTACHMENT = "attachment"
    PRINT_NOTICE = "print_notice"  # 印发说明
    POST_DISTRIBUTION = "post_distribution"  # 抄送/主送
    SIGNATURE = "signature"  # 落款与成文日期


@dataclass(frozen=True)
class PlaceholderSpan:
    """文本片段.

    正文按〔〕切分后的片段；is_placeholder 表示该片段是需人工确认的占位符。
    start/end 为片段在所属行内的字符偏移。
    """

    text: str
    start: int
    end: int
    is_placeholder: bool = False


@dataclass(frozen=True)
class TaggedLine:
    """标记后的行."""

    role: LineRole
    text: str

    @property
    def is_blank(self) -> bool:
        return self.role == LineRole.BLANK


@dataclass
class PreflightIssue:
    """预检问题.

    Attributes:
        id: 问题标识，同一类别同一位置稳定不变
        label: 展示文本
        position: 在文档文本中的字符偏移，用于定位光标
        category: 问题类别（missing/order/length/placeholder）
        count: 字数不符时记录的实际字数
    """

    id: str
    label: str
    position: int
    category: str = ""
    count: Optional[int] = None

    def __repr__(self) -> str:
        return f"PreflightIssue(id='{self.id}', label='{self.label}', position={self.position})"


@dataclass(frozen=True)
class SectionSpec:
    """论文章节规格，字数为不含空白字符的闭区间."""

    key: str
    label: str
    min_length: int
    max_length: int

    def accepts(self, count: int) -> bool:
        return self.min_length <= count <= self.max_length


@dataclass(frozen=True)
class VersionEntry:
    """版本记录."""

    id: str
    label: str
    content: str
    timestamp: str
