"""公文版式参数表.

A4 纸张、页边距、29磅固定行距网格，以及各结构角色对应的字体、字号、对齐与缩进。
单位：长度为毫米（mm）或磅（pt），字号为磅。
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional

from gongwen.data.models import LineRole


@dataclass(frozen=True)
class FontSpec:
    """字体：西文字体与中文字体分别设置."""

    ascii: str
    east_asia: str


@dataclass(frozen=True)
class PageGeometry:
    width_mm: float = 210
    height_mm: float = 297
    top_mm: float = 37
    left_mm: float = 28
    right_mm: float = 26
    bottom_mm: float = 35
    header_mm: float = 15
    footer_mm: float = 15
    line_pitch_pt: float = 29  # 文档网格行距


@dataclass(frozen=True)
class ParagraphStyle:
    """段落样式.

    line_pt 为 None 时使用默认行距；否则为固定行距。
    """

    font: FontSpec
    size_pt: float = 16
    alignment: str = "left"
    bold: bool = False
    first_line_indent_pt: float = 0
    space_before_pt: float = 0
    space_after_pt: float = 0
    line_pt: Optional[float] = 29


@dataclass(frozen=True)
class RuleSpec:
    """分隔线：段落下边框.

    size 单位为八分之一磅，space 单位为磅。
    """

    color: str
    size: int
    space: int = 1
    space_before_pt: float = 0
    space_after_pt: float = 0
    line_pt: Optional[float] = 5


PAGE = PageGeometry()

BASE_FONT = FontSpec(ascii="Times New Roman", east_asia="FangSong")  # 仿宋
SONG_FONT = FontSpec(ascii="Times New Roman", east_asia="SimSun")  # 宋体
HEI_FONT = FontSpec(ascii="Times New Roman", east_asia="SimHei")  # 黑体

BODY_SIZE_PT = 16  # 三号
TITLE_SIZE_PT = 22  # 二号
POST_SIZE_PT = 14  # 四号
NOTE_SIZE_PT = 12  # 小四
FOOTER_SIZE_PT = 14

INDENT_PT = 32  # 首行缩进两字
POST_INDENT_PT = 28

BODY_STYLE = ParagraphStyle(font=BASE_FONT, first_line_indent_pt=INDENT_PT)

ROLE_STYLES: Dict[LineRole, ParagraphStyle] = {
    LineRole.BLANK: ParagraphStyle(font=BASE_FONT),
    LineRole.DOC_HEADER: ParagraphStyle(font=SONG_FONT, alignment="center", bold=True),
    LineRole.DOC_NUMBER: ParagraphStyle(font=BASE_FONT, alignment="center"),
    LineRole.TITLE: ParagraphStyle(
        font=SONG_FONT, size_pt=TITLE_SIZE_PT, alignment="center", bold=True,
        space_before_pt=12, space_after_pt=8,
    ),
    LineRole.ADDRESSEE: ParagraphStyle(font=BASE_FONT),
    LineRole.SECTION_HEADING: ParagraphStyle(font=HEI_FONT, bold=True, first_line_indent_pt=INDENT_PT),
    LineRole.SIGNATURE: ParagraphStyle(font=BASE_FONT, alignment="right", space_before_pt=6),
    LineRole.ATTACHMENT: ParagraphStyle(font=BASE_FONT, first_line_indent_pt=INDENT_PT, space_before_pt=6),
    LineRole.POST_DISTRIBUTION: ParagraphStyle(font=BASE_FONT, size_pt=POST_SIZE_PT, first_line_indent_pt=POST_INDENT_PT),
    LineRole.PRINT_NOTICE: ParagraphStyle(font=BASE_FONT, size_pt=POST_SIZE_PT, first_line_indent_pt=POST_INDENT_PT),
    LineRole.BODY: BODY_STYLE,
}

DOC_NUMBER_RULE = RuleSpec(color="C00000", size=12, space_before_pt=4, space_after_pt=6, line_pt=None)  # 红色分隔线
POST_RULE = RuleSpec(color="000000", size=8)  # 版记粗线
POST_INNER_RULE = RuleSpec(color="000000", size=4)  # 版记细线

FOOTER_DASH = "—"
FOOTER_FONT = SONG_FONT


def style_for(role: LineRole) -> ParagraphStyle:
    """取角色样式，未知角色按正文处理."""
    return ROLE_STYLES.get(role, BODY_STYLE)


def attachment_style(text: str) -> ParagraphStyle:
    """附件说明以“附件”开头时加粗."""
    style = style_for(LineRole.ATTACHMENT)
    return replace(style, bold=text.startswith("附件"))


def footer_alignments(strict: bool) -> Dict[str, str]:
    """页脚页码对齐方式.

    严格模式下奇数页居右、偶数页居左；否则统一居中。
    """
    if strict:
        return {"default": "right", "even": "left"}
    return {"default": "center"}
